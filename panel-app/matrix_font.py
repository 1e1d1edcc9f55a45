"""
Matrix Panel - 5x7 Dot-Matrix Font

Each glyph is 7 row values; each value encodes one row of 5 dots,
MSB-first: bit4=left ... bit0=right.  Only uppercase ASCII is provided;
the display upper-cases its text before lookup, and characters missing
from the table are skipped by the rasterizer (no placeholder glyph).

The table is a module-level constant shared by every display instance and
is never mutated.
"""

from __future__ import annotations

from typing import Iterator

GLYPH_WIDTH  = 5
GLYPH_HEIGHT = 7
CHAR_SPACING = 1    # blank columns between two glyph slots


class FontTableError(ValueError):
    """Raised at start-up when the glyph table cannot describe a grid."""


# ---------------------------------------------------------------------------
# Glyph table
#
# Encoding reminder:
#   "X...X"  ->  0b10001
#   ".XXX."  ->  0b01110
#   "XXXXX"  ->  0b11111
# ---------------------------------------------------------------------------

GLYPHS: dict[str, bytes] = {
    # ---- Digits -------------------------------------------------------
    '0': bytes([0b01110, 0b10001, 0b10011, 0b10101, 0b11001, 0b10001, 0b01110]),
    '1': bytes([0b00100, 0b01100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110]),
    '2': bytes([0b01110, 0b10001, 0b00001, 0b00010, 0b00100, 0b01000, 0b11111]),
    '3': bytes([0b11111, 0b00010, 0b00100, 0b00010, 0b00001, 0b10001, 0b01110]),
    '4': bytes([0b00010, 0b00110, 0b01010, 0b10010, 0b11111, 0b00010, 0b00010]),
    '5': bytes([0b11111, 0b10000, 0b11110, 0b00001, 0b00001, 0b10001, 0b01110]),
    '6': bytes([0b00110, 0b01000, 0b10000, 0b11110, 0b10001, 0b10001, 0b01110]),
    '7': bytes([0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b01000, 0b01000]),
    '8': bytes([0b01110, 0b10001, 0b10001, 0b01110, 0b10001, 0b10001, 0b01110]),
    '9': bytes([0b01110, 0b10001, 0b10001, 0b01111, 0b00001, 0b00010, 0b01100]),

    # ---- Uppercase letters --------------------------------------------
    'A': bytes([0b01110, 0b10001, 0b10001, 0b11111, 0b10001, 0b10001, 0b10001]),
    'B': bytes([0b11110, 0b10001, 0b10001, 0b11110, 0b10001, 0b10001, 0b11110]),
    'C': bytes([0b01110, 0b10001, 0b10000, 0b10000, 0b10000, 0b10001, 0b01110]),
    'D': bytes([0b11100, 0b10010, 0b10001, 0b10001, 0b10001, 0b10010, 0b11100]),
    'E': bytes([0b11111, 0b10000, 0b10000, 0b11110, 0b10000, 0b10000, 0b11111]),
    'F': bytes([0b11111, 0b10000, 0b10000, 0b11110, 0b10000, 0b10000, 0b10000]),
    'G': bytes([0b01110, 0b10001, 0b10000, 0b10111, 0b10001, 0b10001, 0b01111]),
    'H': bytes([0b10001, 0b10001, 0b10001, 0b11111, 0b10001, 0b10001, 0b10001]),
    'I': bytes([0b01110, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110]),
    'J': bytes([0b00111, 0b00010, 0b00010, 0b00010, 0b00010, 0b10010, 0b01100]),
    'K': bytes([0b10001, 0b10010, 0b10100, 0b11000, 0b10100, 0b10010, 0b10001]),
    'L': bytes([0b10000, 0b10000, 0b10000, 0b10000, 0b10000, 0b10000, 0b11111]),
    'M': bytes([0b10001, 0b11011, 0b10101, 0b10101, 0b10001, 0b10001, 0b10001]),
    'N': bytes([0b10001, 0b10001, 0b11001, 0b10101, 0b10011, 0b10001, 0b10001]),
    'O': bytes([0b01110, 0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01110]),
    'P': bytes([0b11110, 0b10001, 0b10001, 0b11110, 0b10000, 0b10000, 0b10000]),
    # Q: tail drawn through the bottom-right corner
    'Q': bytes([0b01110, 0b10001, 0b10001, 0b10001, 0b10101, 0b10010, 0b01101]),
    'R': bytes([0b11110, 0b10001, 0b10001, 0b11110, 0b10100, 0b10010, 0b10001]),
    'S': bytes([0b01111, 0b10000, 0b10000, 0b01110, 0b00001, 0b00001, 0b11110]),
    'T': bytes([0b11111, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100]),
    'U': bytes([0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01110]),
    'V': bytes([0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01010, 0b00100]),
    'W': bytes([0b10001, 0b10001, 0b10001, 0b10101, 0b10101, 0b10101, 0b01010]),
    'X': bytes([0b10001, 0b10001, 0b01010, 0b00100, 0b01010, 0b10001, 0b10001]),
    'Y': bytes([0b10001, 0b10001, 0b10001, 0b01010, 0b00100, 0b00100, 0b00100]),
    'Z': bytes([0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b10000, 0b11111]),

    # ---- Punctuation --------------------------------------------------
    ' ':  bytes([0, 0, 0, 0, 0, 0, 0]),
    '!':  bytes([0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b00000, 0b00100]),
    '?':  bytes([0b01110, 0b10001, 0b00001, 0b00010, 0b00100, 0b00000, 0b00100]),
    '.':  bytes([0, 0, 0, 0, 0, 0b01100, 0b01100]),
    ',':  bytes([0, 0, 0, 0, 0b01100, 0b00100, 0b01000]),
    # colon doubles as the clock separator
    ':':  bytes([0, 0b01100, 0b01100, 0, 0b01100, 0b01100, 0]),
    ';':  bytes([0, 0b01100, 0b01100, 0, 0b01100, 0b00100, 0b01000]),
    '-':  bytes([0, 0, 0, 0b11111, 0, 0, 0]),
    '+':  bytes([0, 0b00100, 0b00100, 0b11111, 0b00100, 0b00100, 0]),
    '=':  bytes([0, 0, 0b11111, 0, 0b11111, 0, 0]),
    '/':  bytes([0, 0b00001, 0b00010, 0b00100, 0b01000, 0b10000, 0]),
    "'":  bytes([0b01100, 0b00100, 0b01000, 0, 0, 0, 0]),
    '"':  bytes([0b01010, 0b01010, 0b01010, 0, 0, 0, 0]),
    '(':  bytes([0b00010, 0b00100, 0b01000, 0b01000, 0b01000, 0b00100, 0b00010]),
    ')':  bytes([0b01000, 0b00100, 0b00010, 0b00010, 0b00010, 0b00100, 0b01000]),
    '<':  bytes([0b00010, 0b00100, 0b01000, 0b10000, 0b01000, 0b00100, 0b00010]),
    '>':  bytes([0b01000, 0b00100, 0b00010, 0b00001, 0b00010, 0b00100, 0b01000]),
    '#':  bytes([0b01010, 0b01010, 0b11111, 0b01010, 0b11111, 0b01010, 0b01010]),
    '%':  bytes([0b11000, 0b11001, 0b00010, 0b00100, 0b01000, 0b10011, 0b00011]),
    '&':  bytes([0b01100, 0b10010, 0b10100, 0b01000, 0b10101, 0b10010, 0b01101]),
    '*':  bytes([0, 0b00100, 0b10101, 0b01110, 0b10101, 0b00100, 0]),
    '_':  bytes([0, 0, 0, 0, 0, 0, 0b11111]),
    '@':  bytes([0b01110, 0b10001, 0b00001, 0b01101, 0b10101, 0b10101, 0b01110]),
    '$':  bytes([0b00100, 0b01111, 0b10100, 0b01110, 0b00101, 0b11110, 0b00100]),
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def glyph_for(ch: str) -> bytes | None:
    """Return the row values for *ch*, or None if the font has no glyph."""
    return GLYPHS.get(ch)


def is_supported(ch: str) -> bool:
    return ch in GLYPHS


def glyph_matrix(ch: str) -> tuple[tuple[int, ...], ...] | None:
    """Return the glyph for *ch* as GLYPH_HEIGHT rows of 0/1 values."""
    glyph = GLYPHS.get(ch)
    if glyph is None:
        return None
    return tuple(
        tuple(1 if bits & (1 << (GLYPH_WIDTH - 1 - col)) else 0
              for col in range(GLYPH_WIDTH))
        for bits in glyph
    )


def lit_cells(ch: str) -> Iterator[tuple[int, int]]:
    """Yield (row, col) for every lit dot of *ch*, row-major.

    Yields nothing for characters missing from the table.
    """
    glyph = GLYPHS.get(ch)
    if glyph is None:
        return
    for row in range(GLYPH_HEIGHT):
        bits = glyph[row]
        for col in range(GLYPH_WIDTH):
            if bits & (1 << (GLYPH_WIDTH - 1 - col)):
                yield row, col


# ---------------------------------------------------------------------------
# Start-up validation
# ---------------------------------------------------------------------------

def validate_font(
    glyphs: dict[str, bytes] | None = None,
    width: int = GLYPH_WIDTH,
    height: int = GLYPH_HEIGHT,
) -> None:
    """Check that the glyph table can drive a grid.

    Args:
        glyphs: Table to check; defaults to the module table.
        width:  Expected glyph width in dots.
        height: Expected glyph height in rows.

    Raises:
        FontTableError: If a dimension is not positive, the table is empty,
            or a glyph has the wrong row count or a row wider than *width*.
    """
    if glyphs is None:
        glyphs = GLYPHS
    if width <= 0 or height <= 0:
        raise FontTableError(f"Glyph size must be positive, got {width}x{height}")
    if not glyphs:
        raise FontTableError("Glyph table is empty")

    limit = 1 << width
    for ch, rows in glyphs.items():
        if len(rows) != height:
            raise FontTableError(
                f"Glyph {ch!r} has {len(rows)} rows, expected {height}"
            )
        for bits in rows:
            if bits >= limit:
                raise FontTableError(
                    f"Glyph {ch!r} row 0b{bits:b} is wider than {width} dots"
                )
