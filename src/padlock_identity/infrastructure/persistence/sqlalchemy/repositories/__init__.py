"""SQLAlchemy repository implementations for padlock_identity."""

from padlock_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (
    AccountRepositorySQLAlchemy,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.repositories.base import (
    SQLAlchemyRepository,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.repositories.session_repository import (
    SessionRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "SQLAlchemyRepository",
    "SessionRepositorySQLAlchemy",
]
