"""
Matrix Panel - Rasterizer

Turns a display's state into a draw list of filled circles for the current
surface size.  Pure: reading the display never changes it, and nothing is
painted here (see ui_manager.paint_frame).

Geometry
--------
  cell      -- side of one square grid cell (layout.calculate_cell_size)
  diameter  -- PIXEL_DIAMETER * cell, centred in its cell
  grid      -- GRID_COLS x GRID_ROWS cells, centred in the surface
  glyphs    -- GLYPH_HEIGHT rows, centred vertically between the margin rows

Character i of the text starts (GLYPH_WIDTH + CHAR_SPACING) * i cells from
the text origin.  The origin is the scroll position while the display is
scrolling, otherwise the text is centred in the grid.  Characters without
a glyph draw nothing but still take their slot.
"""

from __future__ import annotations

from typing import NamedTuple

import config
from layout import GRID_COLS, GRID_ROWS, grid_pixel_size, text_pixel_width
from matrix_display import MatrixDisplay, ScrollStyle
from matrix_font import CHAR_SPACING, GLYPH_HEIGHT, GLYPH_WIDTH, lit_cells


class Circle(NamedTuple):
    """One dot to paint; (x, y) is the top-left of its bounding square."""

    x: float
    y: float
    diameter: float
    color: tuple
    lit: bool = True    # False for the unlit background grid

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    @property
    def center(self) -> tuple[float, float]:
        r = self.diameter / 2.0
        return self.x + r, self.y + r


class Frame(NamedTuple):
    """Everything the presentation layer needs to paint one redraw."""

    cell_size: float
    clip: tuple[float, float, float, float]     # grid rect: x, y, w, h
    circles: list[Circle]
    bezel_color: tuple = config.BEZEL_COLOR

    @property
    def lit(self) -> list[Circle]:
        """Only the glyph dots (idle cells filtered out)."""
        return [c for c in self.circles if c.lit]


def text_origin_x(display: MatrixDisplay, grid_x: float, grid_w: float,
                  text_w: float) -> float:
    """Left edge of the first glyph slot for the display's current state."""
    if not display.is_scrolling():
        return grid_x + (grid_w - text_w) / 2.0

    offset = display.scroll_offset
    if display.scroll_style is ScrollStyle.BOUNCE:
        # Start left-aligned and sweep left until the right edges meet.
        return grid_x - offset
    # Wrap: enter from the right edge, travel left.
    return grid_x + grid_w - offset


def render(display: MatrixDisplay) -> Frame:
    """Build the draw list for *display* at the surface size it last saw.

    Returns:
        A Frame whose circles are ordered idle cells first (when shown),
        then glyph dots left-to-right, top-to-bottom within each glyph.
    """
    width, height = display.size

    cell = display.cell_size()
    diameter = cell * config.PIXEL_DIAMETER
    inset = (cell - diameter) / 2.0

    grid_w, grid_h = grid_pixel_size(cell)
    grid_x = (width - grid_w) / 2.0
    grid_y = (height - grid_h) / 2.0
    clip = (grid_x, grid_y, grid_w, grid_h)

    circles: list[Circle] = []

    if display.show_idle_cells:
        idle = display.background_color
        for row in range(GRID_ROWS):
            y = grid_y + row * cell + inset
            for col in range(GRID_COLS):
                circles.append(
                    Circle(grid_x + col * cell + inset, y, diameter, idle, lit=False)
                )

    text = display.text
    if not text:
        return Frame(cell, clip, circles)

    text_w = text_pixel_width(text, cell)
    x_origin = text_origin_x(display, grid_x, grid_w, text_w)
    y_origin = grid_y + ((GRID_ROWS - GLYPH_HEIGHT) // 2) * cell
    slot_w = (GLYPH_WIDTH + CHAR_SPACING) * cell
    grid_right = grid_x + grid_w
    lit_color = display.pixel_color

    for index, ch in enumerate(text):
        char_x = x_origin + index * slot_w
        # Whole slot outside the grid: nothing of it can be visible.
        if char_x + GLYPH_WIDTH * cell < grid_x or char_x > grid_right:
            continue
        for row, col in lit_cells(ch):
            x = char_x + col * cell + inset
            if x + diameter < grid_x or x > grid_right:
                continue
            y = y_origin + row * cell + inset
            circles.append(Circle(x, y, diameter, lit_color))

    return Frame(cell, clip, circles)
