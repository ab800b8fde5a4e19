"""
Injectable time source.

Report generation needs "now" twice: the generation timestamp (which
also names the output file) and "today" for the entries-list overview.
Both come from a ``Clock`` handed to the service, so reports built in
tests are byte-for-byte reproducible.  ``SystemClock`` is the only
place that reads the real time.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone

_DEFAULT_TEST_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of the current time; ``now()`` is timezone-aware."""

    @abstractmethod
    def now(self) -> datetime: ...

    def today(self) -> date:
        """Calendar date of ``now()`` in the clock's own timezone."""
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Frozen clock for tests.

    Returns ``fixed_time`` (default 2024-01-01 12:00 UTC) until moved with
    ``advance()`` or ``set_time()``.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._base = fixed_time or _DEFAULT_TEST_TIME
        self._offset = timedelta(0)

    def now(self) -> datetime:
        return self._base + self._offset

    def set_time(self, time: datetime) -> None:
        self._base = time
        self._offset = timedelta(0)

    def advance(self, seconds: int = 1) -> None:
        self._offset += timedelta(seconds=seconds)
