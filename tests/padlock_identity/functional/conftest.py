"""Fixtures for functional tests against in-memory SQLite."""

import pytest

from padlock_config import Settings
from padlock_identity.infrastructure.factory import build_identity_service
from padlock_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    SessionRepositorySQLAlchemy,
)
from tests.shared.fixtures.clock import FrozenClock
from tests.shared.fixtures.database import (  # noqa: F401
    sqlite_engine,
    sqlite_session_maker,
)
from tests.shared.fixtures.mailer import RecordingMailer


@pytest.fixture
def settings():
    # Low Argon2 costs keep hashing fast
    return Settings(
        _env_file=None,
        argon2_memory_cost=1024,
        argon2_time_cost=1,
        argon2_parallelism=1,
        frontend_base_url="https://app.example.com",
    )


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def account_repository(sqlite_session_maker):
    return AccountRepositorySQLAlchemy(sqlite_session_maker)


@pytest.fixture
def session_repository(sqlite_session_maker):
    return SessionRepositorySQLAlchemy(sqlite_session_maker)


@pytest.fixture
def identity(settings, sqlite_session_maker, mailer, clock):
    return build_identity_service(settings, sqlite_session_maker, mailer=mailer, clock=clock)
