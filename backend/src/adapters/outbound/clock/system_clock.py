"""Wall-clock implementation of ClockPort."""
from __future__ import annotations

import time


class SystemClock:
    """Epoch-millisecond clock backed by ``time.time``."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock:
    """Manually advanced clock for scripted runs and tests."""

    def __init__(self, now_ms: int = 0) -> None:
        self._now = now_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        self._now += ms
        return self._now
