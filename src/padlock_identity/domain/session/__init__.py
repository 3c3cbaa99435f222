"""Session domain: refresh-token sessions, independent of the password."""

from padlock_identity.domain.session.entities import Session
from padlock_identity.domain.session.repositories import SessionRepository
from padlock_identity.domain.session.value_objects import SessionKind

__all__ = [
    "Session",
    "SessionKind",
    "SessionRepository",
]
