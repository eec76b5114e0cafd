"""Weigher-Sim - a simulated weighing instrument running a capture FSM.

Exercises rin, rin-fsm, rin-schedule and rin-device.  A load settles on
the scale, the machine captures the weight once it is stable and goes back
to capturing when the load moves again.

Controls:
  F1          Raise "run" (idle -> run)
  F2          Raise "reset" (any state -> idle)
  Up / Down   Add / remove 5 kg
  Z           Unload the scale
  D           Dump the machine as DOT (see --dot)
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from game.machine import build_machine
from game.scale import Scale
from rin import App, configure_logging
from rin_device import Device, make_device_system
from ui.constants import BG_COLOR, FPS, SCREEN_H, SCREEN_W, TPS
from ui.lcd import draw_flags, draw_lcd, draw_status_bar

logger = logging.getLogger("weigher-sim")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Weigher-Sim - rin-fsm visual demo")
    p.add_argument("--tps", type=int, default=TPS, help=f"Ticks per second (default: {TPS})")
    p.add_argument("--trace", action="store_true", help="Log every state change")
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    p.add_argument("--dot", type=str, default="weigher.dot",
                   metavar="FILE", help="File written by the D key (default: weigher.dot)")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)

    device = Device()
    scale = Scale(device.status)
    captures: list[float] = []
    fsm = build_machine(device, scale, captures, trace=args.trace)

    app = App(tps=args.tps)
    app.add_loop(lambda ctx: scale.update(ctx.dt))
    app.add_loop(make_device_system(device))

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Weigher-Sim - rin-fsm demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)
    big = pygame.font.SysFont("monospace", 56, bold=True)

    tick_interval = 1.0 / args.tps
    accumulator = 0.0
    running = True

    while running:
        accumulator += clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_F1:
                    fsm.raise_event("run")
                elif event.key == pygame.K_F2:
                    fsm.raise_event("reset")
                elif event.key == pygame.K_UP:
                    scale.load(5.0)
                elif event.key == pygame.K_DOWN:
                    scale.load(-5.0)
                elif event.key == pygame.K_z:
                    scale.unload()
                elif event.key == pygame.K_d:
                    fsm.dump(args.dot, show_current=True)
                    logger.info("wrote %s", args.dot)

        # --- Tick ---
        while accumulator >= tick_interval:
            app.step()
            accumulator -= tick_interval

        # --- Render ---
        screen.fill(BG_COLOR)
        draw_lcd(screen, big, font, device.display, scale.weight)
        draw_flags(screen, font, device.status, fsm.get_state(), captures)
        draw_status_bar(screen, font)
        pygame.display.flip()

    logger.info("captured %d weights", len(captures))
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
