"""Wall-clock delta measurement for the host render loop."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable


class FrameTimer:
    """Measures the time between successive ``advance`` calls."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._last = clock()
        self.delta = timedelta(0)

    def reset(self) -> None:
        self._last = self._clock()
        self.delta = timedelta(0)

    def advance(self) -> timedelta:
        now = self._clock()
        self.delta = timedelta(seconds=max(0.0, now - self._last))
        self._last = now
        return self.delta
