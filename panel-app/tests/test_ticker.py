"""
Tests for the main-loop driven repeating timer.
"""

import unittest
from unittest.mock import MagicMock

from ticker import Ticker


class TestTicker(unittest.TestCase):

    def setUp(self):
        self.callback = MagicMock()
        self.ticker = Ticker(self.callback, max_catch_up=5)

    def test_starts_inactive(self):
        self.assertFalse(self.ticker.active)
        self.assertEqual(self.ticker.interval_ms, 0)

    def test_advance_while_stopped_does_nothing(self):
        self.assertEqual(self.ticker.advance(1000), 0)
        self.callback.assert_not_called()

    def test_fires_once_per_period(self):
        self.ticker.start(50)
        self.assertEqual(self.ticker.advance(49), 0)
        self.assertEqual(self.ticker.advance(1), 1)
        self.assertEqual(self.callback.call_count, 1)

    def test_partial_frames_accumulate(self):
        self.ticker.start(50)
        for _ in range(6):
            self.ticker.advance(16.75)
        self.assertEqual(self.callback.call_count, 2)

    def test_catch_up_is_capped(self):
        self.ticker.start(50)
        self.assertEqual(self.ticker.advance(10_000), 5)
        # Backlog dropped: the next period starts from scratch.
        self.assertEqual(self.ticker.advance(49), 0)

    def test_start_rejects_non_positive_interval(self):
        with self.assertRaises(ValueError):
            self.ticker.start(0)

    def test_restart_resets_phase(self):
        self.ticker.start(50)
        self.ticker.advance(40)
        self.ticker.start(50)
        self.assertEqual(self.ticker.advance(40), 0)

    def test_stop_is_idempotent(self):
        self.ticker.start(50)
        self.ticker.stop()
        self.ticker.stop()
        self.assertFalse(self.ticker.active)
        self.assertEqual(self.ticker.advance(100), 0)

    def test_stop_from_callback_ends_loop(self):
        self.callback.side_effect = self.ticker.stop
        self.ticker.start(50)
        self.assertEqual(self.ticker.advance(200), 1)
        self.assertFalse(self.ticker.active)

    def test_restart_from_callback_uses_new_period(self):
        self.callback.side_effect = lambda: self.ticker.start(20)
        self.ticker.start(50)
        self.assertEqual(self.ticker.advance(200), 1)
        self.assertEqual(self.ticker.interval_ms, 20)
