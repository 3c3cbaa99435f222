"""Value objects for the account domain."""

from padlock_identity.domain.account.value_objects.email import (
    EMAIL_MAX_LENGTH,
    Email,
)

__all__ = [
    "EMAIL_MAX_LENGTH",
    "Email",
]
