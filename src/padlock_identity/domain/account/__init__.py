"""Account domain.

This domain handles:
- Account aggregate (credentials, verification, pending password reset)
- Email normalization
- The repository port used by the account lifecycle
"""

from padlock_identity.domain.account.aggregates import DEFAULT_LOCALE, Account
from padlock_identity.domain.account.exceptions import (
    BootstrapAdminClaimedError,
    EmailAlreadyExistsError,
    StaleAccountError,
    UsernameAlreadyExistsError,
)
from padlock_identity.domain.account.repositories import AccountRepository
from padlock_identity.domain.account.value_objects import EMAIL_MAX_LENGTH, Email

__all__ = [
    "DEFAULT_LOCALE",
    "EMAIL_MAX_LENGTH",
    "Account",
    "AccountRepository",
    "BootstrapAdminClaimedError",
    "Email",
    "EmailAlreadyExistsError",
    "StaleAccountError",
    "UsernameAlreadyExistsError",
]
