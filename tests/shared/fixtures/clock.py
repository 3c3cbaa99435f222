"""Deterministic clock for expiry and rotation tests."""

from datetime import datetime, timedelta, timezone

from padlock_identity.domain.shared.time import Clock

# Fixed point in time - ensures deterministic behavior
FROZEN_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = FROZEN_NOW):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by ``timedelta(**kwargs)`` and return the new time."""
        self._now = self._now + timedelta(**kwargs)
        return self._now
