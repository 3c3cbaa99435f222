"""SQLAlchemy implementation for padlock_identity persistence.

Provides:
- Base: Declarative base for identity models
- AccountModel / SessionModel: SQLAlchemy models
- AccountRepositorySQLAlchemy / SessionRepositorySQLAlchemy: repository
  implementations, one transaction per call
- Engine, session maker and schema helpers
"""

from padlock_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine_from_settings,
    create_session_maker,
    create_tables,
    drop_tables,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    SessionModel,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    SessionRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "Base",
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "TimestampMixin",
    "create_engine_from_settings",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
