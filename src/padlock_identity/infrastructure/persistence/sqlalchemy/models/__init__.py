"""SQLAlchemy models for padlock_identity."""

from padlock_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.models.session_model import (
    SessionModel,
)

__all__ = [
    "AccountModel",
    "SessionModel",
]
