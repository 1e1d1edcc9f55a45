"""
Tests for the rasterizer: grid placement, glyph positions, scrolling
origin, and culling at the grid edges.

With a 1000x1000 surface the cell is 10 px, dots are 8 px with a 1 px
inset, and the 1000x90 grid sits at (0, 455).
"""

import unittest

from matrix_display import MatrixDisplay, ScrollStyle
from rasterizer import Circle, render, text_origin_x


def _display(text="", idle=False, width=1000, height=1000):
    d = MatrixDisplay(width, height)
    d.set_show_idle_cells(idle)
    d.set_text(text)
    return d


class TestGridPlacement(unittest.TestCase):

    def test_grid_centred_in_surface(self):
        frame = render(_display())
        self.assertEqual(frame.cell_size, 10.0)
        self.assertEqual(frame.clip, (0.0, 455.0, 1000.0, 90.0))

    def test_height_limited_grid_centred_horizontally(self):
        frame = render(_display(width=2000, height=180))
        self.assertEqual(frame.cell_size, 19.0)
        self.assertEqual(frame.clip, (50.0, 4.5, 1900.0, 171.0))

    def test_idle_cells_cover_the_grid(self):
        d = _display(idle=True)
        frame = render(d)
        self.assertEqual(len(frame.circles), 900)
        self.assertEqual(frame.lit, [])
        self.assertTrue(all(c.color == d.background_color for c in frame.circles))

    def test_idle_cells_hidden(self):
        frame = render(_display())
        self.assertEqual(frame.circles, [])

    def test_render_does_not_change_state(self):
        d = _display("H" * 30)
        d.set_scroll_enabled(True)
        d.advance(d.tick_interval_ms)
        before = (d.text, d.scroll_offset, d.scroll_direction, d.driver_state)
        render(d)
        render(d)
        self.assertEqual(before, (d.text, d.scroll_offset, d.scroll_direction,
                                  d.driver_state))


class TestGlyphPlacement(unittest.TestCase):

    def test_single_glyph_centred(self):
        frame = render(_display("I", idle=True))
        self.assertEqual(len(frame.lit), 11)
        self.assertEqual(frame.lit[0], Circle(486.0, 466.0, 8.0, (0, 255, 0)))

    def test_glyph_rows_sit_between_margin_rows(self):
        frame = render(_display("H"))
        ys = [c.y for c in frame.lit]
        self.assertEqual(min(ys), 455 + 10 + 1)
        self.assertEqual(max(ys), 455 + 70 + 1)

    def test_circle_geometry(self):
        circle = render(_display("I")).lit[0]
        self.assertEqual(circle.radius, 4.0)
        self.assertEqual(circle.center, (490.0, 470.0))

    def test_unknown_character_keeps_its_slot(self):
        frame = render(_display("I~I"))
        self.assertEqual(len(frame.lit), 22)
        xs = {c.x for c in frame.lit}
        # origin (1000 - 170) / 2 = 415; glyph slots are 60 px apart
        self.assertIn(426.0, xs)
        self.assertIn(546.0, xs)
        self.assertFalse(any(475 < x < 535 for x in xs))

    def test_lowercase_drawn_as_uppercase(self):
        self.assertEqual(render(_display("i")).lit, render(_display("I")).lit)

    def test_empty_text_draws_no_glyphs(self):
        self.assertEqual(render(_display("")).lit, [])

    def test_lit_colour_follows_display(self):
        d = _display("I")
        d.set_color("red")
        self.assertTrue(all(c.color == (255, 0, 0) for c in render(d).lit))

    def test_short_text_centred_even_with_scroll_enabled(self):
        d = _display("I")
        d.set_scroll_enabled(True)
        self.assertEqual(render(d).lit[0].x, 486.0)

    def test_short_text_centred_with_bounce(self):
        d = _display("I")
        d.set_scroll_style(ScrollStyle.BOUNCE)
        d.set_scroll_enabled(True)
        d.advance(1000)
        self.assertEqual(render(d).lit[0].x, 486.0)


class TestScrollingOrigin(unittest.TestCase):

    def setUp(self):
        self.display = _display("H" * 30)
        self.display.set_scroll_enabled(True)

    def test_wrap_starts_beyond_right_edge(self):
        self.assertEqual(render(self.display).lit, [])

    def test_wrap_first_step_shows_first_column(self):
        self.display.advance(self.display.tick_interval_ms)
        lit = render(self.display).lit
        self.assertEqual(len(lit), 7)
        self.assertTrue(all(c.x == 991.0 for c in lit))

    def test_bounce_starts_left_aligned(self):
        self.display.set_scroll_style(ScrollStyle.BOUNCE)
        lit = render(self.display).lit
        self.assertEqual(min(c.x for c in lit), 1.0)

    def test_bounce_origin_moves_left(self):
        self.display.set_scroll_style(ScrollStyle.BOUNCE)
        self.display.advance(self.display.tick_interval_ms)
        self.assertEqual(text_origin_x(self.display, 0.0, 1000.0, 1790.0), -10.0)

    def test_dots_never_drawn_outside_grid(self):
        for style in (ScrollStyle.WRAP, ScrollStyle.BOUNCE):
            self.display.set_scroll_style(style)
            for _ in range(300):
                self.display.advance(self.display.tick_interval_ms)
                for c in render(self.display).lit:
                    self.assertGreaterEqual(c.x + c.diameter, 0.0)
                    self.assertLessEqual(c.x, 1000.0)

    def test_not_scrolling_origin_is_centred(self):
        self.display.set_scroll_enabled(False)
        self.assertEqual(text_origin_x(self.display, 0.0, 1000.0, 1790.0), -395.0)
