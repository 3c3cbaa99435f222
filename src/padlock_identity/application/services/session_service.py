"""Refresh-token sessions: issue, rotate and revoke."""

from __future__ import annotations

import logging
from uuid import UUID

from padlock_identity.application.policy import IdentityPolicy
from padlock_identity.domain.session import Session, SessionKind, SessionRepository
from padlock_identity.domain.shared.time import Clock, SystemClock
from padlock_identity.exceptions import NotFoundError, TokenExpiredError, TokenType
from padlock_identity.services import TokenGenerator

logger = logging.getLogger(__name__)


class SessionService:
    """
    Application service for refresh-token sessions.

    Sessions are independent of the account's password: each login on a
    device gets its own session, and each refresh swaps its token for a new
    one while sliding the expiry forward. Revocation only ever shortens
    ``expires_at`` to now.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        token_generator: TokenGenerator | None = None,
        clock: Clock | None = None,
        policy: IdentityPolicy | None = None,
    ):
        self._session_repo = session_repository
        self._tokens = token_generator or TokenGenerator()
        self._clock = clock or SystemClock()
        self._policy = policy or IdentityPolicy()

    async def create_session(
        self,
        account_id: UUID,
        client_ip: str,
        user_agent: str,
        kind: SessionKind = SessionKind.USER,
    ) -> Session:
        """Open a session for a live account.

        Raises
        ------
        NotFoundError
            If the account does not exist or is deleted
        """
        session = Session.create(
            account_id=account_id,
            refresh_token=self._tokens.refresh_token(),
            client_ip=client_ip,
            user_agent=user_agent,
            kind=kind,
            now=self._clock.now(),
            ttl=self._policy.session_ttl,
        )
        if not await self._session_repo.add(session):
            raise NotFoundError("account", account_id)
        logger.info("Session created: %s (account: %s)", session.id, account_id)
        return session

    async def refresh_session(self, refresh_token: str, client_ip: str) -> Session:
        """Rotate a refresh token.

        Parameters
        ----------
        refresh_token
            The token the client presents; it is invalid afterwards
        client_ip
            Address of the client, recorded on the session

        Returns
        -------
        The session carrying the new token and the slid expiry

        Raises
        ------
        NotFoundError
            If no session holds the token, including when a concurrent
            refresh already rotated it
        TokenExpiredError
            If the session expired or was revoked
        """
        now = self._clock.now()
        session = await self._session_repo.find_by_refresh_token(
            refresh_token, now, include_expired=True
        )
        if session is None:
            logger.warning("Refresh attempted with unknown token")
            raise NotFoundError("session")

        if session.is_expired(now):
            logger.warning("Refresh attempted on expired session %s", session.id)
            raise TokenExpiredError(TokenType.REFRESH)

        rotated = await self._session_repo.rotate(
            session_id=session.id,
            old_token=refresh_token,
            new_token=self._tokens.refresh_token(),
            client_ip=client_ip,
            now=now,
            expires_at=now + self._policy.session_ttl,
        )
        if rotated is None:
            logger.warning("Lost rotation race on session %s", session.id)
            raise NotFoundError("session", session.id)

        logger.debug("Session rotated: %s", session.id)
        return rotated

    async def revoke_session(self, session_id: UUID) -> None:
        if await self._session_repo.revoke(session_id, self._clock.now()):
            logger.info("Session revoked: %s", session_id)

    async def revoke_by_token(self, refresh_token: str) -> None:
        if await self._session_repo.revoke_by_token(refresh_token, self._clock.now()):
            logger.info("Session revoked by token")

    async def revoke_all_for_account(self, account_id: UUID) -> int:
        count = await self._session_repo.revoke_all_for_account(
            account_id, self._clock.now()
        )
        if count:
            logger.info("Revoked %d sessions of account %s", count, account_id)
        return count

    async def get_session(self, session_id: UUID) -> Session:
        session = await self._session_repo.find_by_id(session_id, self._clock.now())
        if session is None:
            raise NotFoundError("session", session_id)
        return session

    async def list_sessions(
        self, account_id: UUID, include_expired: bool = False
    ) -> list[Session]:
        return await self._session_repo.list_by_account_id(
            account_id, self._clock.now(), include_expired=include_expired
        )
