"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.clock import FROZEN_NOW, FrozenClock
from tests.shared.fixtures.database import (
    pg_async_url,
    pg_engine,
    pg_session_maker,
    postgres_container,
    sqlite_engine,
    sqlite_session_maker,
)
from tests.shared.fixtures.mailer import RecordingMailer, SentMail

__all__ = [
    "FROZEN_NOW",
    "FrozenClock",
    "RecordingMailer",
    "SentMail",
    "pg_async_url",
    "pg_engine",
    "pg_session_maker",
    "postgres_container",
    "sqlite_engine",
    "sqlite_session_maker",
]
