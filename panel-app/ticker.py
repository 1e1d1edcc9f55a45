"""
Matrix Panel - Repeating Timer

A single periodic callback pumped by the host's main loop.  Nothing runs
in the background: the loop measures elapsed time each frame and passes it
to advance(), which fires the callback once per whole period that has gone
by.

Public API
----------
    ticker = Ticker(on_tick)
    ticker.start(50)          # (re)arm at a 50 ms period, phase reset
    ticker.advance(16.7)      # call every frame with elapsed milliseconds
    ticker.stop()             # safe to call when already stopped
"""

from __future__ import annotations

import logging
from typing import Callable

import config

log = logging.getLogger(__name__)


class Ticker:
    """Repeating timer with an explicit start / stop / advance contract.

    Args:
        callback:     Called with no arguments on every tick.
        max_catch_up: Most ticks fired by one advance() call.  A loop that
                      stalls for longer drops the backlog instead of
                      replaying it.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        max_catch_up: int = config.MAX_CATCH_UP_TICKS,
    ) -> None:
        self._callback = callback
        self._max_catch_up = max(1, max_catch_up)
        self._interval_ms: int = 0
        self._elapsed_ms: float = 0.0
        self._active = False
        # Bumped on every start()/stop() so advance() notices a callback
        # that re-armed or stopped the timer mid-loop.
        self._generation = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    @property
    def interval_ms(self) -> int:
        """Current period; 0 when the timer has never been started."""
        return self._interval_ms

    def start(self, interval_ms: int) -> None:
        """Arm the timer at *interval_ms*, restarting the period from zero.

        Raises:
            ValueError: If *interval_ms* is not positive.
        """
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")
        self._interval_ms = int(interval_ms)
        self._elapsed_ms = 0.0
        self._active = True
        self._generation += 1

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._elapsed_ms = 0.0
        self._generation += 1

    def advance(self, elapsed_ms: float) -> int:
        """Account for *elapsed_ms* of wall time and fire any due ticks.

        Returns:
            Number of ticks fired.
        """
        if not self._active or elapsed_ms <= 0:
            return 0

        self._elapsed_ms += elapsed_ms
        fired = 0
        while self._active and self._elapsed_ms >= self._interval_ms:
            if fired >= self._max_catch_up:
                log.debug("Dropping %.0f ms of tick backlog", self._elapsed_ms)
                self._elapsed_ms = 0.0
                break
            self._elapsed_ms -= self._interval_ms
            generation = self._generation
            self._callback()
            fired += 1
            if self._generation != generation:
                # Re-armed or stopped from inside the callback; the new
                # period starts from now.
                break
        return fired
