"""Padlock Identity - accounts, credentials and sessions.

This module handles all identity-related concerns:
- Account lifecycle (registration, verification, soft deletion, bootstrap admin)
- Credential hashing and verification (Argon2id)
- Input validation (username and password rule sets)
- Password recovery (single-use reset tokens)
- Refresh-token sessions (issue, rotate, revoke)

Every error derives from IdentityError and carries an ErrorKind.
"""

from padlock_identity.application import (
    AccountService,
    IdentityPolicy,
    IdentityService,
    Mailer,
    SessionService,
)
from padlock_identity.domain.account import Account, AccountRepository, Email
from padlock_identity.domain.session import Session, SessionKind, SessionRepository
from padlock_identity.domain.shared import Clock, SystemClock
from padlock_identity.exceptions import (
    AlreadyVerifiedError,
    ConflictError,
    ConflictField,
    ConflictReason,
    CredentialFailure,
    ErrorKind,
    IdentityError,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    MailDeliveryError,
    MalformedHashError,
    NotFoundError,
    StorageError,
    TokenExpiredError,
    TokenType,
    UnverifiedError,
    ValidationFailedError,
    ValidationRule,
)
from padlock_identity.schemas import PasswordResetTicket
from padlock_identity.services import (
    Argon2Parameters,
    PasswordHashingService,
    TokenGenerator,
)

__all__ = [
    # Domain
    "Account",
    "AccountRepository",
    "Clock",
    "Email",
    "Session",
    "SessionKind",
    "SessionRepository",
    "SystemClock",
    # Exceptions
    "AlreadyVerifiedError",
    "ConflictError",
    "ConflictField",
    "ConflictReason",
    "CredentialFailure",
    "ErrorKind",
    "IdentityError",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MailDeliveryError",
    "MalformedHashError",
    "NotFoundError",
    "StorageError",
    "TokenExpiredError",
    "TokenType",
    "UnverifiedError",
    "ValidationFailedError",
    "ValidationRule",
    # Schemas
    "PasswordResetTicket",
    # Services
    "Argon2Parameters",
    "PasswordHashingService",
    "TokenGenerator",
    # Application
    "AccountService",
    "IdentityPolicy",
    "IdentityService",
    "Mailer",
    "SessionService",
]
