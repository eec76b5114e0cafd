"""Layout constants and color definitions."""

# Timing
FPS = 60
TPS = 20

# Layout dimensions
SCREEN_W = 640
LCD_H = 200
FLAGS_H = 120
STATUS_H = 36
SCREEN_H = LCD_H + FLAGS_H + STATUS_H
PAD = 16

# Colors
BG_COLOR = (20, 20, 30)
LCD_BG = (150, 170, 120)
LCD_INK = (25, 35, 20)
PANEL_BG = (30, 30, 45)
STATUS_BG = (35, 35, 50)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
FLAG_ON = (100, 255, 100)
FLAG_OFF = (70, 70, 90)

# Status flags shown in the panel, in order
STATUS_FLAGS = ["zero", "notzero", "motion", "notmotion"]
