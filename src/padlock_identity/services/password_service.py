"""Password hashing service using Argon2id.

Hashes are encoded in the PHC string format::

    $argon2id$v=19$m=32768,t=2,p=2$<salt>$<key>

so every stored hash carries the parameters it was produced with, and
verification keeps working after the parameters are tuned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from argon2 import PasswordHasher, Type, extract_parameters
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)
from argon2.low_level import ARGON2_VERSION

from padlock_identity.exceptions import InternalError, MalformedHashError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Argon2Parameters:
    """Tunable Argon2id cost parameters.

    Attributes
    ----------
    memory_cost
        Memory usage in KiB
    time_cost
        Number of iterations
    parallelism
        Number of lanes
    salt_length
        Salt size in bytes (at least 16)
    key_length
        Derived key size in bytes
    """

    memory_cost: int = 32 * 1024
    time_cost: int = 2
    parallelism: int = 2
    salt_length: int = 16
    key_length: int = 32

    def __post_init__(self) -> None:
        if self.salt_length < 16:
            msg = "Salt length must be at least 16 bytes"
            raise ValueError(msg)
        if self.key_length < 16:
            msg = "Key length must be at least 16 bytes"
            raise ValueError(msg)


DEFAULT_PARAMETERS = Argon2Parameters()


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> hash = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    def __init__(self, parameters: Argon2Parameters = DEFAULT_PARAMETERS):
        """Initialize the password hashing service.

        Parameters
        ----------
        parameters
            Argon2id cost parameters used for new hashes. Existing hashes
            are always verified with the parameters embedded in them.
        """
        self._parameters = parameters
        self._hasher = PasswordHasher(
            time_cost=parameters.time_cost,
            memory_cost=parameters.memory_cost,
            parallelism=parameters.parallelism,
            hash_len=parameters.key_length,
            salt_len=parameters.salt_length,
            type=Type.ID,
        )

    @property
    def parameters(self) -> Argon2Parameters:
        return self._parameters

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The encoded Argon2id hash

        Raises
        ------
        InternalError
            If the underlying Argon2 library fails
        """
        try:
            return self._hasher.hash(password)
        except HashingError as e:
            logger.error("Argon2 hashing failed: %s", e)
            raise InternalError("Password hashing failed", cause=e) from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against an encoded hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The encoded hash to verify against

        Returns
        -------
        True if password matches, False otherwise

        Raises
        ------
        MalformedHashError
            If the hash is not a supported Argon2id encoding
        """
        self.parameters_of(password_hash)
        try:
            return self._hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise MalformedHashError from e

    def parameters_of(self, password_hash: str) -> Argon2Parameters:
        """Read the parameters an encoded hash was produced with.

        Raises
        ------
        MalformedHashError
            If the hash is not in the expected format, uses another Argon2
            variant or another Argon2 version
        """
        if not isinstance(password_hash, str):
            raise MalformedHashError

        try:
            params = extract_parameters(password_hash)
        except InvalidHashError as e:
            raise MalformedHashError from e

        if params.type is not Type.ID:
            msg = f"Unsupported hash variant: {params.type.name.lower()}"
            raise MalformedHashError(msg)

        if params.version != ARGON2_VERSION:
            msg = f"Unsupported Argon2 version: {params.version}"
            raise MalformedHashError(msg)

        try:
            return Argon2Parameters(
                memory_cost=params.memory_cost,
                time_cost=params.time_cost,
                parallelism=params.parallelism,
                salt_length=params.salt_len,
                key_length=params.hash_len,
            )
        except ValueError as e:
            raise MalformedHashError from e

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash needs to be rehashed.

        This is useful when the cost parameters change. Existing hashes can
        be identified and regenerated on the next successful login.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError:
            return True
