"""
Matrix Panel - Display Core

Holds the state of one simulated LED panel (text, mode, colours, scroll
phase) and runs its animation.  This is the component the host talks to:
it exposes the control surface as plain setters, reports whether the
current text overflows the grid, and calls ``on_redraw`` whenever what is
on the panel may have changed.  Painting lives elsewhere (rasterizer.py
builds the draw list, ui_manager.py paints it).

Animation driver
----------------
One repeating Ticker drives everything.  Its state is derived, never
stored:

  IDLE      -- ticker stopped
  CLOCK     -- ticker running at CLOCK_INTERVAL_MS in clock mode
  SCROLLING -- ticker running at the scroll interval in text mode

Whether to (re)start scrolling is re-evaluated after a text change, a
switch back to text mode, a scroll enable/style change and a resize.
Every re-evaluation starts the scroll from offset 0.

Public API
----------
    display = MatrixDisplay(900, 220, on_redraw=callback)
    display.set_text("hello world")
    display.set_scroll_enabled(display.requires_scrolling())
    display.advance(dt_ms)          # call every main-loop iteration
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Callable

import pygame

import config
from layout import (
    GRID_COLS,
    GRID_ROWS,
    calculate_cell_size,
    overflows,
    text_pixel_width,
)
from matrix_font import FontTableError, validate_font
from ticker import Ticker

log = logging.getLogger(__name__)


class DisplayMode(Enum):
    TEXT = "text"
    CLOCK = "clock"


class ScrollStyle(Enum):
    WRAP = "wrap"       # marquee: exit left, re-enter right
    BOUNCE = "bounce"   # sweep back and forth across the overflow


class DriverState(Enum):
    IDLE = "idle"
    CLOCK = "clock"
    SCROLLING = "scrolling"


def scroll_interval_for(level: int) -> int:
    """Tick period in ms for speed *level*; higher levels tick faster."""
    return max(1, round(config.BASE_SCROLL_INTERVAL_MS * 2 / level))


def _to_rgb(color) -> tuple[int, int, int]:
    """Normalise anything pygame.Color accepts to an (r, g, b) tuple."""
    c = pygame.Color(color)
    return c.r, c.g, c.b


class MatrixDisplay:
    """State and animation for one simulated dot-matrix panel.

    Args:
        width, height: Initial surface size in pixels.  Defaults to the
                       size hint.
        scale_factor:  Device pixels per logical pixel (HiDPI).
        on_redraw:     Called with no arguments whenever the panel needs
                       repainting.  The host is expected to coalesce calls.
        now_fn:        Time source for clock mode; defaults to
                       ``datetime.now``.

    Raises:
        FontTableError: If the glyph table or the grid it implies is
            degenerate.  Checked once, here, at start-up.
    """

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        scale_factor: float = 1.0,
        on_redraw: Callable[[], None] | None = None,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        validate_font()
        if GRID_COLS <= 0 or GRID_ROWS <= 0:
            raise FontTableError(f"Grid must be positive, got {GRID_COLS}x{GRID_ROWS}")

        hint_w, hint_h = self.size_hint()
        self._width = width if width is not None and width > 0 else hint_w
        self._height = height if height is not None and height > 0 else hint_h
        self._scale_factor = scale_factor

        self.on_redraw = on_redraw
        self._now_fn = now_fn or datetime.now

        # Display state
        self._text = ""
        self._mode = DisplayMode.TEXT
        self._pixel_color = _to_rgb(config.PIXEL_COLOR)
        self._background_color = _to_rgb(config.BACKGROUND_COLOR)
        self._show_idle_cells = True

        # Scroll state
        self._scroll_enabled = False
        self._scroll_style = ScrollStyle.WRAP
        self._offset = 0.0
        self._direction = 1
        self._speed_level = config.SPEED_DEFAULT
        self._scroll_interval_ms = scroll_interval_for(self._speed_level)

        self._ticker = Ticker(self._on_timeout)

    # ------------------------------------------------------------------
    # Size hints
    # ------------------------------------------------------------------

    @staticmethod
    def size_hint() -> tuple[int, int]:
        """Preferred surface size: the grid at the default cell size."""
        return (
            int(GRID_COLS * config.DEFAULT_CELL_SIZE),
            int(GRID_ROWS * config.DEFAULT_CELL_SIZE),
        )

    @classmethod
    def minimum_size(cls) -> tuple[int, int]:
        w, h = cls.size_hint()
        return w // 2, h // 2

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def pixel_color(self) -> tuple[int, int, int]:
        return self._pixel_color

    @property
    def background_color(self) -> tuple[int, int, int]:
        return self._background_color

    @property
    def show_idle_cells(self) -> bool:
        return self._show_idle_cells

    @property
    def scroll_enabled(self) -> bool:
        return self._scroll_enabled

    @property
    def scroll_style(self) -> ScrollStyle:
        return self._scroll_style

    @property
    def scroll_offset(self) -> float:
        return self._offset

    @property
    def scroll_direction(self) -> int:
        return self._direction

    @property
    def speed_level(self) -> int:
        return self._speed_level

    @property
    def scroll_interval_ms(self) -> int:
        return self._scroll_interval_ms

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def scale_factor(self) -> float:
        return self._scale_factor

    @property
    def driver_state(self) -> DriverState:
        if not self._ticker.active:
            return DriverState.IDLE
        if self._mode is DisplayMode.CLOCK:
            return DriverState.CLOCK
        return DriverState.SCROLLING

    @property
    def tick_interval_ms(self) -> int:
        """Period of the running driver, or 0 when idle."""
        return self._ticker.interval_ms if self._ticker.active else 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def cell_size(self) -> float:
        """Cell size for the current surface; recomputed on every call."""
        return calculate_cell_size(
            self._width, self._height, scale_factor=self._scale_factor
        )

    def requires_scrolling(self) -> bool:
        """True if the current text is wider than the grid at the current size."""
        return overflows(self._text, self.cell_size())

    def is_scrolling(self) -> bool:
        """True if the text is currently drawn at its scroll position."""
        return (
            self._mode is DisplayMode.TEXT
            and self._scroll_enabled
            and self.requires_scrolling()
        )

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def set_text(self, text: str) -> None:
        """Show *text* (upper-cased).  Scrolling restarts from the edge."""
        self._text = str(text).upper()
        self._offset = 0.0
        if self._mode is DisplayMode.TEXT:
            self._restart_scroll_if_needed()
        self._request_redraw()

    def set_color(self, color) -> None:
        """Set the lit-dot colour.  Unparseable colours are ignored."""
        try:
            self._pixel_color = _to_rgb(color)
        except (ValueError, TypeError):
            log.debug("Ignoring invalid pixel colour %r", color)
            return
        self._request_redraw()

    def set_background_color(self, color) -> None:
        """Set the unlit-dot colour.  Unparseable colours are ignored."""
        try:
            self._background_color = _to_rgb(color)
        except (ValueError, TypeError):
            log.debug("Ignoring invalid background colour %r", color)
            return
        self._request_redraw()

    def set_show_idle_cells(self, show: bool) -> None:
        show = bool(show)
        if show == self._show_idle_cells:
            return
        self._show_idle_cells = show
        self._request_redraw()

    def set_mode(self, mode) -> None:
        """Switch between text and clock mode.

        Entering clock mode disables scrolling, shows the time at once and
        ticks every CLOCK_INTERVAL_MS.  Returning to text mode re-evaluates
        scrolling for whatever text is on the panel.
        """
        try:
            mode = DisplayMode(mode)
        except ValueError:
            log.debug("Ignoring unknown display mode %r", mode)
            return
        if mode is self._mode:
            return

        self._mode = mode
        self._ticker.stop()

        if mode is DisplayMode.CLOCK:
            self._scroll_enabled = False
            self._offset = 0.0
            self._direction = 1
            self._on_clock_tick()
            self._ticker.start(config.CLOCK_INTERVAL_MS)
            log.debug("Clock mode: ticking every %d ms", config.CLOCK_INTERVAL_MS)
        else:
            self._restart_scroll_if_needed()
            log.debug("Text mode: driver %s", self.driver_state.value)
        self._request_redraw()

    def set_scroll_enabled(self, enabled: bool) -> None:
        """Allow or forbid scrolling.  Always forbidden in clock mode."""
        allow = bool(enabled) and self._mode is DisplayMode.TEXT
        if allow == self._scroll_enabled:
            return

        self._scroll_enabled = allow
        self._offset = 0.0
        self._direction = 1
        self._ticker.stop()
        if allow:
            self._restart_scroll_if_needed()
        self._request_redraw()

    def set_scroll_style(self, style) -> None:
        try:
            style = ScrollStyle(style)
        except ValueError:
            log.debug("Ignoring unknown scroll style %r", style)
            return
        if style is self._scroll_style:
            return

        self._scroll_style = style
        self._restart_scroll_if_needed()
        self._request_redraw()

    def set_scroll_speed(self, level: int) -> None:
        """Change the scroll speed (SPEED_MIN..SPEED_MAX) of a running scroll.

        The new period applies immediately and the scroll keeps its
        position.  Ignored unless the driver is scrolling, and for levels
        outside the valid range.
        """
        if (isinstance(level, bool) or not isinstance(level, int)
                or not config.SPEED_MIN <= level <= config.SPEED_MAX):
            log.debug("Ignoring out-of-range scroll speed %r", level)
            return
        if self.driver_state is not DriverState.SCROLLING:
            log.debug("Scroll speed %d ignored: driver is %s", level,
                      self.driver_state.value)
            return

        self._speed_level = level
        self._scroll_interval_ms = scroll_interval_for(level)
        self._ticker.start(self._scroll_interval_ms)
        log.debug("Scroll speed %d: %d ms per step", level, self._scroll_interval_ms)

    def notify_resized(self, width: int, height: int,
                       scale_factor: float | None = None) -> None:
        """Record a new surface size.  Non-positive sizes are ignored."""
        if width <= 0 or height <= 0:
            log.debug("Ignoring degenerate surface size %dx%d", width, height)
            return
        if scale_factor is not None and scale_factor <= 0:
            scale_factor = None

        new_scale = scale_factor if scale_factor is not None else self._scale_factor
        if (width, height, new_scale) == (self._width, self._height, self._scale_factor):
            return

        self._width, self._height = width, height
        self._scale_factor = new_scale
        if self._mode is DisplayMode.TEXT:
            self._restart_scroll_if_needed()
        self._request_redraw()

    def advance(self, elapsed_ms: float) -> int:
        """Pump the animation driver; returns the number of ticks fired."""
        return self._ticker.advance(elapsed_ms)

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def _restart_scroll_if_needed(self) -> None:
        """Stop, rewind, and start scrolling again if the text overflows."""
        self._ticker.stop()
        self._offset = 0.0
        self._direction = 1
        if self._mode is not DisplayMode.TEXT or not self._scroll_enabled:
            return
        if self.requires_scrolling():
            self._ticker.start(self._scroll_interval_ms)
            log.debug("Scrolling %s every %d ms", self._scroll_style.value,
                      self._scroll_interval_ms)

    def _on_timeout(self) -> None:
        if self._mode is DisplayMode.CLOCK:
            self._on_clock_tick()
        elif self._scroll_enabled:
            self._on_scroll_tick()

    def _on_clock_tick(self) -> None:
        """Show HH:MM; the colon blinks off on even seconds."""
        now = self._now_fn()
        time_text = now.strftime("%H:%M")
        if now.second % 2 == 0:
            time_text = time_text[:2] + " " + time_text[3:]
        if time_text != self._text:
            self._text = time_text
            self._request_redraw()

    def _on_scroll_tick(self) -> None:
        cell = self.cell_size()
        text_w = text_pixel_width(self._text, cell)
        grid_w = GRID_COLS * cell

        if text_w <= grid_w:
            # Text no longer overflows (resized or shortened): park it.
            self._ticker.stop()
            self._offset = 0.0
            self._direction = 1
            log.debug("Overflow gone, scrolling stopped")
            self._request_redraw()
            return

        if self._scroll_style is ScrollStyle.BOUNCE:
            self._advance_bounce(text_w, grid_w, cell)
        else:
            self._advance_wrap(text_w, grid_w, cell)
        self._request_redraw()

    def _advance_wrap(self, text_w: float, grid_w: float, cell: float) -> None:
        wrap_width = text_w + grid_w
        if wrap_width <= 0:
            return
        self._offset += cell
        if self._offset >= wrap_width:
            self._offset = math.fmod(self._offset, wrap_width)

    def _advance_bounce(self, text_w: float, grid_w: float, cell: float) -> None:
        travel = abs(text_w - grid_w)
        if travel <= 0:
            self._offset = 0.0
            self._direction = 1
            return
        self._offset += self._direction * cell
        if self._offset >= travel:
            self._offset = travel
            self._direction = -1
        elif self._offset <= 0:
            self._offset = 0.0
            self._direction = 1

    def _request_redraw(self) -> None:
        if self.on_redraw is not None:
            self.on_redraw()
