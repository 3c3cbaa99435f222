"""Application layer: use cases over the account and session domains."""

from padlock_identity.application.policy import IdentityPolicy
from padlock_identity.application.ports import Mailer
from padlock_identity.application.services import (
    AccountService,
    IdentityService,
    SessionService,
)

__all__ = [
    "AccountService",
    "IdentityPolicy",
    "IdentityService",
    "Mailer",
    "SessionService",
]
