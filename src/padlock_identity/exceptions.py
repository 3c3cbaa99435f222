"""Identity and session exceptions.

Every exception raised by the padlock_identity package derives from
``IdentityError`` and carries an explicit ``kind``. Callers (a transport
layer, a CLI) branch on ``error.kind`` and the structured fields to pick a
status code and a localized message; the messages here are developer text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    """Error categories exposed to callers."""

    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNVERIFIED = "unverified"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    ALREADY_VERIFIED = "already_verified"
    INTERNAL = "internal"


class ValidationRule(str, Enum):
    """Names of the validation rules, reported by ``ValidationFailedError``."""

    EMAIL_INVALID = "email_invalid"
    EMAIL_TOO_LONG = "email_too_long"
    USERNAME_TOO_SHORT = "username_too_short"
    USERNAME_TOO_LONG = "username_too_long"
    USERNAME_INVALID_CHARACTERS = "username_invalid_characters"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_TOO_LONG = "password_too_long"
    PASSWORD_MISSING_LOWERCASE = "password_missing_lowercase"
    PASSWORD_MISSING_UPPERCASE = "password_missing_uppercase"
    PASSWORD_MISSING_DIGIT = "password_missing_digit"
    PASSWORD_MISSING_SYMBOL = "password_missing_symbol"
    PASSWORD_TOO_SIMILAR = "password_too_similar"


class ConflictField(str, Enum):
    EMAIL = "email"
    USERNAME = "username"


class ConflictReason(str, Enum):
    EXISTS = "exists"
    DEACTIVATED = "deactivated"


class CredentialFailure(str, Enum):
    """Internal reason behind an ``InvalidCredentialsError``.

    Only meant for server-side logging; both reasons must look identical to
    whoever made the request.
    """

    ACCOUNT_NOT_FOUND = "account_not_found"
    PASSWORD_MISMATCH = "password_mismatch"


class TokenType(str, Enum):
    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"
    REFRESH = "refresh"


class IdentityError(Exception):
    """Base exception for all identity errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, message: str = "Identity error"):
        self.message = message
        super().__init__(self.message)


class ValidationFailedError(IdentityError):
    """Raised when an input violates a validation rule."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, rule: ValidationRule, message: str | None = None):
        self.rule = rule
        super().__init__(message or f"Validation failed: {rule.value}")


class ConflictError(IdentityError):
    """Raised when a username or email is already taken."""

    kind = ErrorKind.CONFLICT

    def __init__(self, field: ConflictField, reason: ConflictReason):
        self.field = field
        self.reason = reason
        if reason == ConflictReason.DEACTIVATED:
            message = f"The {field.value} belongs to a deactivated account"
        else:
            message = f"The {field.value} is already in use"
        super().__init__(message)


class NotFoundError(IdentityError):
    """Raised when an account or session does not exist (or is gone)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: object = None):
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            message = f"{resource.capitalize()} not found"
        else:
            message = f"{resource.capitalize()} not found: {identifier}"
        super().__init__(message)


class InvalidCredentialsError(IdentityError):
    """Raised when login/email or password is incorrect."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(
        self,
        reason: CredentialFailure = CredentialFailure.PASSWORD_MISMATCH,
        message: str = "Invalid username, email or password",
    ):
        self.reason = reason
        super().__init__(message)


class UnverifiedError(IdentityError):
    """Raised when login requires a verified email and it is not verified."""

    kind = ErrorKind.UNVERIFIED

    def __init__(self, message: str = "Email address has not been verified"):
        super().__init__(message)


class InvalidTokenError(IdentityError):
    """Raised when a verification, reset or refresh token is unknown."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(self, token_type: TokenType, message: str | None = None):
        self.token_type = token_type
        super().__init__(message or f"Invalid {token_type.value.replace('_', ' ')} token")


class TokenExpiredError(IdentityError):
    """Raised when a reset token or a session has expired."""

    kind = ErrorKind.TOKEN_EXPIRED

    def __init__(self, token_type: TokenType, message: str | None = None):
        self.token_type = token_type
        super().__init__(
            message or f"{token_type.value.replace('_', ' ').capitalize()} token has expired"
        )


class AlreadyVerifiedError(IdentityError):
    """Raised when a verified account presents a verification token again."""

    kind = ErrorKind.ALREADY_VERIFIED

    def __init__(self, message: str = "Email address is already verified"):
        super().__init__(message)


class InternalError(IdentityError):
    """Raised for failures of the storage, hashing or mail collaborators."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = "Internal identity error", cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class StorageError(InternalError):
    """Raised when the database is unavailable or a query fails."""

    def __init__(self, message: str = "Storage failure", cause: BaseException | None = None):
        super().__init__(message, cause)


class MalformedHashError(InternalError):
    """Raised when a stored password hash cannot be decoded."""

    def __init__(self, message: str = "Password hash is malformed or unsupported"):
        super().__init__(message)


class MailDeliveryError(InternalError):
    """Raised after a committed operation whose notification mail failed.

    The mutation is not rolled back; ``result`` holds what the operation
    would have returned.
    """

    def __init__(self, result: Any, cause: BaseException | None = None):
        self.result = result
        super().__init__("The operation succeeded but the notification mail could not be sent", cause)
