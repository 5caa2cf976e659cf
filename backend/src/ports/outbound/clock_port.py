"""Port for the wall clock used to stamp activity and updates."""
from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    def now_ms(self) -> int: ...
