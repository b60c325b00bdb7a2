"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: wall and monotonic time source for log events."""

    def now(self) -> datetime: ...
    def monotonic(self) -> float: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def monotonic(self) -> float:
        return time.monotonic()


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime, monotonic: float = 0.0) -> None:
        self._fixed = fixed
        self._monotonic = monotonic

    def now(self) -> datetime:
        return self._fixed

    def monotonic(self) -> float:
        return self._monotonic

    def advance(self, **kwargs: int | float) -> None:
        """Advance both readings by the given ``timedelta`` kwargs."""
        delta = timedelta(**kwargs)
        self._fixed += delta
        self._monotonic += delta.total_seconds()


__all__ = ["Clock", "FrozenClock", "SystemClock"]
