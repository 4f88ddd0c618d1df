from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta


class Clock(ABC):
    """Source of "now" for lifecycle and period logic."""

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock pinned to a given instant until moved explicitly."""

    def __init__(self, fixed_time: datetime):
        self._fixed_time = fixed_time

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, value: datetime) -> None:
        self._fixed_time = value

    def advance(self, *, days: int = 0, seconds: int = 0) -> datetime:
        self._fixed_time = self._fixed_time + timedelta(days=days, seconds=seconds)
        return self._fixed_time


__all__ = ["Clock", "SystemClock", "FixedClock"]
