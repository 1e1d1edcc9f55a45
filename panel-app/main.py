"""
Matrix Panel - Main Entry Point

Opens the pygame window, builds the simulated LED panel, and runs the main
event loop.

Frame flow
----------
  Every loop iteration:
    1. win.handle_events()  → keyboard / resize / quit
    2. win.update(dt)       → pumps the panel's animation driver
    3. win.draw()           → repaints only if the panel asked for it,
                              then caps the loop at FRAME_RATE
"""

import logging
import sys
import time

from ui_manager import PanelWindow

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s: %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


def main() -> None:
    win = PanelWindow()
    log.info(
        "Matrix panel started (%dx%d window, text %r)",
        *win.screen.get_size(),
        win.display.text,
    )

    last_t = time.monotonic()

    try:
        running = True
        while running:
            now = time.monotonic()
            dt  = now - last_t
            last_t = now

            running = win.handle_events()
            win.update(dt)
            win.draw()

    finally:
        import pygame
        pygame.quit()
        log.info("Pygame quit")


if __name__ == "__main__":
    main()
