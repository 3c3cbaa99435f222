"""Identity services - password hashing and token generation."""

from padlock_identity.services.password_service import (
    DEFAULT_PARAMETERS,
    Argon2Parameters,
    PasswordHashingService,
)
from padlock_identity.services.token_service import TokenGenerator, hash_token

__all__ = [
    "DEFAULT_PARAMETERS",
    "Argon2Parameters",
    "PasswordHashingService",
    "TokenGenerator",
    "hash_token",
]
