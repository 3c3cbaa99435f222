"""Wiring of the identity service from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from padlock_identity.application.policy import IdentityPolicy
from padlock_identity.application.services import IdentityService
from padlock_identity.infrastructure.email import build_mailer
from padlock_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    SessionRepositorySQLAlchemy,
)
from padlock_identity.services import Argon2Parameters, PasswordHashingService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from padlock_config.settings import Settings
    from padlock_identity.application.ports import Mailer
    from padlock_identity.domain.shared.time import Clock


def password_service_from_settings(settings: Settings) -> PasswordHashingService:
    return PasswordHashingService(
        Argon2Parameters(
            memory_cost=settings.argon2_memory_cost,
            time_cost=settings.argon2_time_cost,
            parallelism=settings.argon2_parallelism,
        )
    )


def build_identity_service(
    settings: Settings,
    session_maker: async_sessionmaker[AsyncSession],
    mailer: Mailer | None = None,
    clock: Clock | None = None,
) -> IdentityService:
    """
    Build the identity service backed by the SQLAlchemy repositories.

    Parameters
    ----------
    settings
        Application settings (policy, Argon2 costs, SMTP)
    session_maker
        Session maker bound to the database engine
    mailer
        Mailer to use instead of the one ``build_mailer`` picks
    clock
        Clock to use instead of the system clock

    Returns
    -------
    A ready IdentityService
    """
    return IdentityService(
        account_repository=AccountRepositorySQLAlchemy(session_maker),
        session_repository=SessionRepositorySQLAlchemy(session_maker),
        mailer=mailer or build_mailer(settings),
        password_service=password_service_from_settings(settings),
        clock=clock,
        policy=IdentityPolicy.from_settings(settings),
    )
