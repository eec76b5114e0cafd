"""Instrument LCD, flag panel and bottom key bar."""
from __future__ import annotations

import pygame

from rin_device import Display, FlagBank

from ui.constants import (
    FLAG_OFF,
    FLAG_ON,
    FLAGS_H,
    LCD_BG,
    LCD_H,
    LCD_INK,
    PAD,
    PANEL_BG,
    SCREEN_W,
    STATUS_BG,
    STATUS_FLAGS,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def draw_lcd(
    surface: pygame.Surface,
    big: pygame.font.Font,
    font: pygame.font.Font,
    display: Display,
    weight: float,
) -> None:
    """Draw the weight reading with the four text fields around it."""
    rect = pygame.Rect(PAD, PAD, SCREEN_W - 2 * PAD, LCD_H - 2 * PAD)
    pygame.draw.rect(surface, LCD_BG, rect, border_radius=6)

    reading = big.render(f"{weight:7.1f} kg", True, LCD_INK)
    surface.blit(reading, reading.get_rect(center=rect.center))

    for field in display.fields:
        text = display.read(field)
        if not text:
            continue
        label = font.render(text, True, LCD_INK)
        lr = label.get_rect()
        left = rect.left + 8 if field.endswith("Left") else rect.right - 8 - lr.width
        top = rect.top + 6 if field.startswith("top") else rect.bottom - 6 - lr.height
        surface.blit(label, (left, top))


def draw_flags(
    surface: pygame.Surface,
    font: pygame.font.Font,
    status: FlagBank,
    state: str | None,
    captures: list[float],
) -> None:
    """Draw the status flag lamps, current state and last captures."""
    y = LCD_H
    pygame.draw.rect(surface, PANEL_BG, (0, y, SCREEN_W, FLAGS_H))

    x = PAD
    for flag in STATUS_FLAGS:
        color = FLAG_ON if status.is_set(flag) else FLAG_OFF
        pygame.draw.circle(surface, color, (x + 6, y + 20), 6)
        surface.blit(font.render(flag, True, TEXT_COLOR), (x + 18, y + 12))
        x += 130

    surface.blit(font.render(f"State: {state}", True, TEXT_COLOR), (PAD, y + 44))
    recent = ", ".join(f"{w:.1f}" for w in captures[-5:]) or "-"
    surface.blit(font.render(f"Captured: {recent}", True, TEXT_COLOR), (PAD, y + 70))


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font) -> None:
    """Draw bottom key-bindings bar."""
    y = LCD_H + FLAGS_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))
    pygame.draw.line(surface, (50, 50, 70), (0, y), (SCREEN_W, y))
    text = "[F1] Run  [F2] Reset  [Up/Down] Load +/-5kg  [Z] Unload  [D] Dump  [Esc] Quit"
    label = font.render(text, True, TEXT_DIM)
    surface.blit(label, (8, y + STATUS_H // 2 - label.get_height() // 2))
