"""Session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from padlock_identity.domain.session.entities.session import Session


class SessionRepository(ABC):
    """Repository interface for refresh-token sessions.

    Lookups skip sessions whose ``expires_at`` is not after ``now`` unless
    ``include_expired`` is set. Revocation moves ``expires_at`` to ``now`` and
    never deletes rows.
    """

    @abstractmethod
    async def add(self, session: Session) -> bool:
        """Persist a new session for a live account.

        Returns False, storing nothing, when the account is missing or
        soft-deleted.
        """

    @abstractmethod
    async def find_by_id(
        self, session_id: UUID, now: datetime, include_expired: bool = False
    ) -> Optional[Session]:
        """Find a session by its ID."""

    @abstractmethod
    async def find_by_refresh_token(
        self, refresh_token: str, now: datetime, include_expired: bool = False
    ) -> Optional[Session]:
        """Find the session currently holding ``refresh_token``."""

    @abstractmethod
    async def list_by_account_id(
        self, account_id: UUID, now: datetime, include_expired: bool = False
    ) -> list[Session]:
        """List an account's sessions, oldest first."""

    @abstractmethod
    async def rotate(  # noqa: PLR0913
        self,
        session_id: UUID,
        old_token: str,
        new_token: str,
        client_ip: str,
        now: datetime,
        expires_at: datetime,
    ) -> Optional[Session]:
        """Swap the refresh token if the session still holds ``old_token``.

        Parameters
        ----------
        session_id
            The session's unique identifier
        old_token
            The token the caller presented
        new_token
            The replacement token
        client_ip
            Address of the caller, stored for auditing
        now
            Rotation time, becomes ``last_used_at``
        expires_at
            The new end of the sliding window

        Returns
        -------
        The rotated session, or None when the session is expired, its account
        was deleted or another rotation already replaced ``old_token``.
        """

    @abstractmethod
    async def revoke(self, session_id: UUID, now: datetime) -> bool:
        """Revoke a live session. Returns False if nothing was live."""

    @abstractmethod
    async def revoke_by_token(self, refresh_token: str, now: datetime) -> bool:
        """Revoke the live session holding ``refresh_token``."""

    @abstractmethod
    async def revoke_all_for_account(self, account_id: UUID, now: datetime) -> int:
        """Revoke every live session of an account, returning how many."""
