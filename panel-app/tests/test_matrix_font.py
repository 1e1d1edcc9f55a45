"""
Tests for the 5x7 glyph table and its start-up validation.
"""

import unittest

from matrix_font import (
    GLYPH_HEIGHT,
    GLYPH_WIDTH,
    GLYPHS,
    FontTableError,
    glyph_for,
    glyph_matrix,
    is_supported,
    lit_cells,
    validate_font,
)


class TestGlyphTable(unittest.TestCase):

    def test_digits_and_uppercase_present(self):
        for ch in "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ":
            self.assertTrue(is_supported(ch), ch)

    def test_clock_characters_present(self):
        self.assertTrue(is_supported(":"))
        self.assertTrue(is_supported(" "))

    def test_lowercase_not_in_table(self):
        self.assertFalse(is_supported("a"))
        self.assertIsNone(glyph_for("a"))

    def test_every_glyph_has_seven_rows(self):
        for ch, rows in GLYPHS.items():
            self.assertEqual(len(rows), GLYPH_HEIGHT, ch)

    def test_space_is_blank(self):
        self.assertEqual(list(lit_cells(" ")), [])


class TestGlyphDecoding(unittest.TestCase):

    def test_matrix_of_i(self):
        self.assertEqual(glyph_matrix("I"), (
            (0, 1, 1, 1, 0),
            (0, 0, 1, 0, 0),
            (0, 0, 1, 0, 0),
            (0, 0, 1, 0, 0),
            (0, 0, 1, 0, 0),
            (0, 0, 1, 0, 0),
            (0, 1, 1, 1, 0),
        ))

    def test_matrix_of_unknown_is_none(self):
        self.assertIsNone(glyph_matrix("~"))

    def test_lit_cells_row_major(self):
        cells = list(lit_cells("I"))
        self.assertEqual(cells[:3], [(0, 1), (0, 2), (0, 3)])
        self.assertEqual(len(cells), 11)

    def test_lit_cells_leftmost_bit_is_column_zero(self):
        self.assertIn((0, 0), list(lit_cells("H")))
        self.assertIn((0, GLYPH_WIDTH - 1), list(lit_cells("H")))

    def test_lit_cells_unknown_yields_nothing(self):
        self.assertEqual(list(lit_cells("~")), [])


class TestValidateFont(unittest.TestCase):

    def test_builtin_table_is_valid(self):
        validate_font()

    def test_error_is_a_value_error(self):
        self.assertTrue(issubclass(FontTableError, ValueError))

    def test_empty_table_rejected(self):
        with self.assertRaises(FontTableError):
            validate_font({})

    def test_non_positive_dimensions_rejected(self):
        with self.assertRaises(FontTableError):
            validate_font(width=0)
        with self.assertRaises(FontTableError):
            validate_font(height=-1)

    def test_wrong_row_count_rejected(self):
        with self.assertRaises(FontTableError):
            validate_font({"A": bytes([0b11111] * 6)})

    def test_row_wider_than_glyph_rejected(self):
        rows = bytes([0b100000, 0, 0, 0, 0, 0, 0])
        with self.assertRaises(FontTableError):
            validate_font({"A": rows})
