"""
Matrix Panel - Grid Layout Math

Fits the fixed logical grid into an arbitrary surface.  Cells are always
square so the dots stay circular; the cell size is snapped up to the
device pixel grid so antialiased dots are not squashed into ellipses.

Nothing here is cached: callers recompute on every resize, text change or
mode change.
"""

from __future__ import annotations

import math

import config
from matrix_font import CHAR_SPACING, GLYPH_HEIGHT, GLYPH_WIDTH

GRID_COLS = config.GRID_COLS
GRID_ROWS = GLYPH_HEIGHT + config.GRID_ROW_MARGIN


def calculate_cell_size(
    width: float,
    height: float,
    cols: int = GRID_COLS,
    rows: int = GRID_ROWS,
    min_cell: float = config.MIN_CELL_SIZE,
    max_cell: float = config.MAX_CELL_SIZE,
    height_usage: float = config.MAX_HEIGHT_USAGE,
    scale_factor: float = 1.0,
) -> float:
    """Return the side of one square cell for a *width* x *height* surface.

    The cell is the largest size that fits *cols* across the full width and
    *rows* down ``height_usage`` of the height, clamped to
    [*min_cell*, *max_cell*] and rounded up so ``cell * scale_factor`` is a
    whole number of device pixels.

    Args:
        width, height: Surface size in logical pixels.
        cols, rows:    Grid dimensions in cells.
        min_cell:      Lower clamp; also returned for a degenerate surface.
        max_cell:      Upper clamp; ``<= 0`` disables it.
        height_usage:  Fraction of *height* the grid may occupy.
        scale_factor:  Device pixels per logical pixel.  ``<= 0`` falls back
                       to rounding up to a whole logical pixel.
    """
    if rows <= 0 or cols <= 0:
        return min_cell
    if width <= 0 or height <= 0:
        return min_cell

    size_by_height = (height * height_usage) / rows
    size_by_width = width / cols
    chosen = min(size_by_height, size_by_width)

    if chosen < min_cell:
        chosen = min_cell
    if max_cell > 0 and chosen > max_cell:
        chosen = max_cell

    if scale_factor > 0:
        return math.ceil(chosen * scale_factor) / scale_factor
    return float(math.ceil(chosen))


def text_width_cols(num_chars: int) -> int:
    """Width in cells of *num_chars* glyph slots with one blank column between."""
    if num_chars <= 0:
        return 0
    return num_chars * GLYPH_WIDTH + (num_chars - 1) * CHAR_SPACING


def text_pixel_width(text: str, cell_size: float) -> float:
    """Rendered width of *text* in pixels at *cell_size*."""
    return text_width_cols(len(text)) * cell_size


def grid_pixel_size(cell_size: float) -> tuple[float, float]:
    """Return (width, height) of the whole grid in pixels."""
    return GRID_COLS * cell_size, GRID_ROWS * cell_size


def overflows(text: str, cell_size: float) -> bool:
    """True if *text* is wider than the grid at *cell_size*."""
    if not text:
        return False
    return text_pixel_width(text, cell_size) > GRID_COLS * cell_size
