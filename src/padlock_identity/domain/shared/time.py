"""Time utilities for the domain layer.

All "now" reads in padlock_identity go through a ``Clock`` so expiry and
rotation logic can be driven deterministically in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware UTC datetime."""


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return utc_now()
