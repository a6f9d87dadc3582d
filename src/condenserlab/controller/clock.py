"""
Clock Sources
=============
Two logically independent clocks.

FrameClock: time deltas between physics frames.
Stopwatch: the student's manual timer for the leakage interval. It measures
wall-clock time on its own; the 100 ms display timer only reads it.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class FrameClock:
    """Supplies the real elapsed time since the previous frame."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._last: Optional[float] = None

    def tick(self) -> float:
        now = self._clock()
        if self._last is None:
            self._last = now
            return 0.0
        dt = max(now - self._last, 0.0)
        self._last = max(now, self._last)
        return dt

    def reset(self) -> None:
        self._last = None


class Stopwatch:
    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._accumulated = 0.0
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + max(self._clock() - self._started_at, 0.0)

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._accumulated = self.elapsed_seconds
            self._started_at = None

    def toggle(self) -> None:
        if self.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._accumulated = 0.0
        self._started_at = None
