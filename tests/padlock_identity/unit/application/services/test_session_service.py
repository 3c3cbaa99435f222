"""Unit tests for SessionService."""

from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from padlock_identity.application import IdentityPolicy
from padlock_identity.application.services import SessionService
from padlock_identity.domain.session import Session, SessionKind
from padlock_identity.exceptions import NotFoundError, TokenExpiredError, TokenType
from padlock_identity.services import TokenGenerator
from tests.shared.fixtures.clock import FROZEN_NOW, FrozenClock

SESSION_TTL = timedelta(days=90)


def _session(expires_at=None, token="old-token") -> Session:
    session = Session.create(
        account_id=uuid4(),
        refresh_token=token,
        client_ip="10.0.0.1",
        user_agent="pytest",
        kind=SessionKind.USER,
        now=FROZEN_NOW - timedelta(days=1),
        ttl=SESSION_TTL,
    )
    if expires_at is not None:
        session = replace(session, expires_at=expires_at)
    return session


class TestSessionService:
    def setup_method(self):
        """Set up test fixtures."""
        self.session_repo = AsyncMock()
        self.session_repo.add.return_value = True
        self.tokens = Mock(spec=TokenGenerator)
        self.tokens.refresh_token.return_value = "new-token"
        self.clock = FrozenClock()
        self.service = SessionService(
            session_repository=self.session_repo,
            token_generator=self.tokens,
            clock=self.clock,
            policy=IdentityPolicy(),
        )

    @pytest.mark.asyncio
    async def test_create_session(self):
        account_id = uuid4()

        session = await self.service.create_session(account_id, "10.0.0.2", "Firefox")

        assert session.account_id == account_id
        assert session.refresh_token == "new-token"
        assert session.kind == SessionKind.USER
        assert session.created_at == FROZEN_NOW
        assert session.last_used_at == FROZEN_NOW
        assert session.expires_at == FROZEN_NOW + SESSION_TTL
        self.session_repo.add.assert_awaited_once_with(session)

    @pytest.mark.asyncio
    async def test_create_api_session(self):
        session = await self.service.create_session(uuid4(), "10.0.0.2", "cli", "api")

        assert session.kind == SessionKind.API

    @pytest.mark.asyncio
    async def test_create_session_for_missing_account_raises(self):
        """The repository refuses sessions for deleted accounts."""
        self.session_repo.add.return_value = False
        account_id = uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create_session(account_id, "10.0.0.2", "Firefox")

        assert exc_info.value.resource == "account"

    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self):
        session = _session()
        rotated = replace(
            session,
            refresh_token="new-token",
            client_ip="10.0.0.9",
            last_used_at=FROZEN_NOW,
            expires_at=FROZEN_NOW + SESSION_TTL,
        )
        self.session_repo.find_by_refresh_token.return_value = session
        self.session_repo.rotate.return_value = rotated

        result = await self.service.refresh_session("old-token", "10.0.0.9")

        assert result is rotated
        self.session_repo.find_by_refresh_token.assert_awaited_once_with(
            "old-token", FROZEN_NOW, include_expired=True
        )
        self.session_repo.rotate.assert_awaited_once_with(
            session_id=session.id,
            old_token="old-token",
            new_token="new-token",
            client_ip="10.0.0.9",
            now=FROZEN_NOW,
            expires_at=FROZEN_NOW + SESSION_TTL,
        )

    @pytest.mark.asyncio
    async def test_refresh_unknown_token(self):
        self.session_repo.find_by_refresh_token.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.refresh_session("unknown", "10.0.0.9")

        assert exc_info.value.resource == "session"
        self.session_repo.rotate.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_expired_session(self):
        self.session_repo.find_by_refresh_token.return_value = _session(
            expires_at=FROZEN_NOW - timedelta(seconds=1)
        )

        with pytest.raises(TokenExpiredError) as exc_info:
            await self.service.refresh_session("old-token", "10.0.0.9")

        assert exc_info.value.token_type == TokenType.REFRESH
        self.session_repo.rotate.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_at_expiry_instant_is_expired(self):
        self.session_repo.find_by_refresh_token.return_value = _session(
            expires_at=FROZEN_NOW
        )

        with pytest.raises(TokenExpiredError):
            await self.service.refresh_session("old-token", "10.0.0.9")

    @pytest.mark.asyncio
    async def test_refresh_lost_rotation_race(self):
        session = _session()
        self.session_repo.find_by_refresh_token.return_value = session
        self.session_repo.rotate.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.refresh_session("old-token", "10.0.0.9")

        assert exc_info.value.identifier == session.id

    @pytest.mark.asyncio
    async def test_revoke_is_idempotent(self):
        self.session_repo.revoke.return_value = False
        session_id = uuid4()

        await self.service.revoke_session(session_id)

        self.session_repo.revoke.assert_awaited_once_with(session_id, FROZEN_NOW)

    @pytest.mark.asyncio
    async def test_revoke_by_token(self):
        self.session_repo.revoke_by_token.return_value = True

        await self.service.revoke_by_token("old-token")

        self.session_repo.revoke_by_token.assert_awaited_once_with("old-token", FROZEN_NOW)

    @pytest.mark.asyncio
    async def test_revoke_all_returns_count(self):
        account_id = uuid4()
        self.session_repo.revoke_all_for_account.return_value = 3

        count = await self.service.revoke_all_for_account(account_id)

        assert count == 3
        self.session_repo.revoke_all_for_account.assert_awaited_once_with(
            account_id, FROZEN_NOW
        )

    @pytest.mark.asyncio
    async def test_get_session_not_found(self):
        self.session_repo.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.get_session(uuid4())

    @pytest.mark.asyncio
    async def test_list_sessions(self):
        account_id = uuid4()
        sessions = [_session(), _session(token="other")]
        self.session_repo.list_by_account_id.return_value = sessions

        result = await self.service.list_sessions(account_id, include_expired=True)

        assert result == sessions
        self.session_repo.list_by_account_id.assert_awaited_once_with(
            account_id, FROZEN_NOW, include_expired=True
        )
