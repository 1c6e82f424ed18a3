"""Clock abstraction for server-assigned timestamps.

Writes read the current instant through a ``Clock`` so tests can pin it.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current UTC instant."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    """Wall clock backed by ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Clock that returns a fixed instant until moved.

    Usage:
        clock = FrozenClock(datetime(2025, 1, 1, tzinfo=UTC))
        clock.now()  # 2025-01-01T00:00:00+00:00
        clock.advance(seconds=30)
    """

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            msg = "FrozenClock requires a timezone-aware datetime"
            raise ValueError(msg)
        self._instant = instant.astimezone(UTC)
        self.calls = 0

    def now(self) -> datetime:
        self.calls += 1
        return self._instant

    def advance(self, **delta: float) -> datetime:
        """Move the clock forward by ``timedelta(**delta)``."""
        self._instant += timedelta(**delta)
        return self._instant


__all__ = ["Clock", "FrozenClock", "SystemClock"]
