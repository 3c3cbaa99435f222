"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from padlock_identity.domain.account.aggregates.account import Account
from padlock_identity.domain.account.value_objects.email import Email


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Every lookup ignores soft-deleted accounts unless ``include_deleted`` is
    set. The conditional transitions return ``False`` when their guard did not
    match, which callers read as "someone else got there first".
    """

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert a new account or write back a loaded one.

        An update only applies while the stored row is live and still at
        ``account.version``; the account then moves to the next version.

        Raises
        ------
        StaleAccountError
            The stored row changed or was deleted after the account was
            loaded.
        EmailAlreadyExistsError
            Another row holds the email.
        UsernameAlreadyExistsError
            Another row holds the username.
        BootstrapAdminClaimedError
            The account claims the bootstrap admin marker and another row
            already holds it.
        """

    @abstractmethod
    async def find_by_id(
        self, account_id: UUID, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(
        self, email: Union[str, Email], include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by its (normalized) email address."""

    @abstractmethod
    async def find_by_username(
        self, username: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by its exact username."""

    @abstractmethod
    async def find_by_verification_token(
        self, token: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by its verification token."""

    @abstractmethod
    async def find_by_password_reset_token(
        self, token_hash: str, include_deleted: bool = False
    ) -> Optional[Account]:
        """Find an account by the digest of its pending reset token."""

    @abstractmethod
    async def find_first(self, include_deleted: bool = False) -> Optional[Account]:
        """Return the earliest created account."""

    @abstractmethod
    async def count(self, include_deleted: bool = False) -> int:
        """Count accounts."""

    @abstractmethod
    async def mark_verified(self, account_id: UUID, verified_at: datetime) -> bool:
        """Set ``verified_at`` if the account is live and still unverified."""

    @abstractmethod
    async def set_password_reset(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """Store a pending reset on a live account, replacing any previous one."""

    @abstractmethod
    async def consume_password_reset(
        self,
        account_id: UUID,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Replace the password and clear the reset in one update.

        Only matches while the stored digest still equals ``token_hash`` and
        ``now`` is not past the expiry, so a token authorizes one reset.
        """

    @abstractmethod
    async def soft_delete(self, account_id: UUID, now: datetime) -> bool:
        """Mark a live account as deleted."""
