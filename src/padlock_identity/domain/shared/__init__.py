"""Shared domain utilities."""

from padlock_identity.domain.shared.time import (
    Clock,
    SystemClock,
    ensure_tz_aware,
    utc_now,
)

__all__ = [
    "Clock",
    "SystemClock",
    "ensure_tz_aware",
    "utc_now",
]
