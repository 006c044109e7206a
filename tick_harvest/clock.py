"""Millisecond time sources for regeneration timing."""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Wall-clock milliseconds since the epoch."""

    def now(self) -> int:
        return time.time_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start_ms: int = 0) -> None:
        if start_ms < 0:
            raise ValueError("start_ms must be >= 0")
        self._now = start_ms

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        self._now += ms
        return self._now

    def reset(self, now_ms: int = 0) -> None:
        self._now = now_ms
