"""Account aggregate: credentials, verification and reset state."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from padlock_identity.domain.account.value_objects import Email
from padlock_identity.domain.shared.time import utc_now
from padlock_identity.exceptions import AlreadyVerifiedError

DEFAULT_LOCALE = "en"


class Account:
    """
    Account aggregate root.

    Holds the primary credential (password hash), the email verification
    state and a pending password reset, if any. A soft-deleted account keeps
    its row but behaves as absent for every lookup except audits.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        verification_token: str,
        id: UUID | None = None,
        locale: str = DEFAULT_LOCALE,
        is_admin: bool = False,
        is_bootstrap_admin: bool = False,
        verified_at: datetime | None = None,
        password_reset_token: str | None = None,
        password_reset_expires_at: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
        version: int = 0,
    ):
        self._id = id or uuid4()
        self._username = username
        self._email = email if isinstance(email, Email) else Email(email)
        self._password_hash = password_hash
        self._verification_token = verification_token
        self._locale = locale or DEFAULT_LOCALE
        self._is_admin = is_admin or is_bootstrap_admin
        self._is_bootstrap_admin = is_bootstrap_admin
        self._verified_at = verified_at
        self._password_reset_token = password_reset_token
        self._password_reset_expires_at = password_reset_expires_at
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at
        self._deleted_at = deleted_at
        self._version = version

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def verification_token(self) -> str:
        return self._verification_token

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    @property
    def is_bootstrap_admin(self) -> bool:
        """True for the first account ever created, which became admin on creation."""
        return self._is_bootstrap_admin

    @property
    def verified_at(self) -> datetime | None:
        return self._verified_at

    @property
    def is_verified(self) -> bool:
        return self._verified_at is not None

    @property
    def password_reset_token(self) -> str | None:
        """Digest of the pending reset token, if a reset is pending."""
        return self._password_reset_token

    @property
    def password_reset_expires_at(self) -> datetime | None:
        return self._password_reset_expires_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted_at(self) -> datetime | None:
        return self._deleted_at

    @property
    def version(self) -> int:
        """Row version the account was loaded at; 0 until first persisted."""
        return self._version

    @property
    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def has_pending_reset(self, now: datetime) -> bool:
        return (
            self._password_reset_token is not None
            and not self.password_reset_expired(now)
        )

    def password_reset_expired(self, now: datetime) -> bool:
        """A reset without expiry, or past it, can no longer be used."""
        if self._password_reset_expires_at is None:
            return True
        return now > self._password_reset_expires_at

    def mark_verified(self, now: datetime | None = None) -> None:
        if self.is_verified:
            raise AlreadyVerifiedError
        now = now or utc_now()
        self._verified_at = now
        self._updated_at = now

    def start_password_reset(
        self,
        token_hash: str,
        expires_at: datetime,
        now: datetime | None = None,
    ) -> None:
        """Record a pending reset, replacing any previous one."""
        self._password_reset_token = token_hash
        self._password_reset_expires_at = expires_at
        self._updated_at = now or utc_now()

    def complete_password_reset(
        self,
        password_hash: str,
        now: datetime | None = None,
    ) -> None:
        self._password_hash = password_hash
        self._password_reset_token = None
        self._password_reset_expires_at = None
        self._updated_at = now or utc_now()

    def change_username(self, username: str, now: datetime | None = None) -> None:
        self._username = username
        self._updated_at = now or utc_now()

    def change_email(
        self,
        email: Union[str, Email],
        verification_token: str,
        now: datetime | None = None,
    ) -> None:
        """Change the email; the new address has to be verified again."""
        self._email = email if isinstance(email, Email) else Email(email)
        self._verification_token = verification_token
        self._verified_at = None
        self._updated_at = now or utc_now()

    def change_password(self, password_hash: str, now: datetime | None = None) -> None:
        self._password_hash = password_hash
        self._updated_at = now or utc_now()

    def change_locale(self, locale: str, now: datetime | None = None) -> None:
        self._locale = locale or DEFAULT_LOCALE
        self._updated_at = now or utc_now()

    def relinquish_bootstrap_admin(self) -> None:
        """Drop the bootstrap admin claim after another account won it."""
        self._is_admin = False
        self._is_bootstrap_admin = False

    def advance_version(self) -> None:
        """Record that the stored row moved one version ahead."""
        self._version += 1

    def soft_delete(self, now: datetime | None = None) -> None:
        now = now or utc_now()
        self._deleted_at = now
        self._updated_at = now

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        verification_token: str,
        locale: str = DEFAULT_LOCALE,
        is_bootstrap_admin: bool = False,
        now: datetime | None = None,
    ) -> "Account":
        now = now or utc_now()
        return cls(
            username=username,
            email=email,
            password_hash=password_hash,
            verification_token=verification_token,
            locale=locale,
            is_bootstrap_admin=is_bootstrap_admin,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        username: str,
        email: Union[str, Email],
        password_hash: str,
        verification_token: str,
        locale: str,
        is_admin: bool,
        is_bootstrap_admin: bool,
        verified_at: datetime | None,
        password_reset_token: str | None,
        password_reset_expires_at: datetime | None,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None,
        version: int = 1,
    ) -> "Account":
        return cls(
            id=id,
            username=username,
            email=email,
            password_hash=password_hash,
            verification_token=verification_token,
            locale=locale,
            is_admin=is_admin,
            is_bootstrap_admin=is_bootstrap_admin,
            verified_at=verified_at,
            password_reset_token=password_reset_token,
            password_reset_expires_at=password_reset_expires_at,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
            version=version,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Account(id={self._id}, username={self._username}, "
            f"email={self._email.value})"
        )
