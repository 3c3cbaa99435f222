"""Fixtures for integration tests against a PostgreSQL container."""

import pytest

from padlock_config import Settings
from padlock_identity.infrastructure.factory import build_identity_service
from tests.shared.fixtures.clock import FrozenClock
from tests.shared.fixtures.database import (  # noqa: F401
    pg_async_url,
    pg_engine,
    pg_session_maker,
    postgres_container,
)
from tests.shared.fixtures.mailer import RecordingMailer


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def identity(pg_session_maker, clock):
    settings = Settings(
        _env_file=None,
        argon2_memory_cost=1024,
        argon2_time_cost=1,
        argon2_parallelism=1,
    )
    return build_identity_service(
        settings, pg_session_maker, mailer=RecordingMailer(), clock=clock
    )
