"""
Clock -- injectable time source.

Domain and application code never call datetime.now() directly, so
transitions are reproducible in tests.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current timezone-aware UTC time."""
        ...


class SystemClock(Clock):
    """Production clock that returns actual system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Each call to now() returns the current instant and then moves it
    forward by `step` (zero by default).
    """

    def __init__(self, start: datetime, step: timedelta = timedelta(0)):
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        self._current = start
        self._step = step

    def now(self) -> datetime:
        current = self._current
        self._current = current + self._step
        return current

    def advance(self, delta: timedelta) -> None:
        self._current = self._current + delta
