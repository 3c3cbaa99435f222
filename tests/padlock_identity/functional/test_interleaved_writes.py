"""Operations interleaved with a concurrent write, replayed on SQLite.

Each test wraps a repository call so that another identity operation lands
between a read and the write that depends on it.
"""

import pytest

from padlock_identity.application import IdentityPolicy, IdentityService
from padlock_identity.exceptions import (
    CredentialFailure,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from padlock_identity.infrastructure.factory import password_service_from_settings

ALICE_PASSWORD = "Sup3r$ecretPw"
NEW_PASSWORD = "N3w#Passw0rd!"


@pytest.fixture
def isolated_identity(settings, account_repository, session_repository, mailer, clock):
    """An identity service over the fixture repositories, so tests can wrap them."""
    return IdentityService(
        account_repository=account_repository,
        session_repository=session_repository,
        mailer=mailer,
        password_service=password_service_from_settings(settings),
        clock=clock,
        policy=IdentityPolicy.from_settings(settings),
    )


def _interleave_after_first_read(monkeypatch, account_repository, concurrent):
    """Run ``concurrent`` once, right after the first ``find_by_id`` read."""
    read = account_repository.find_by_id
    pending = [concurrent]

    async def read_then_interleave(account_id, include_deleted=False):
        account = await read(account_id, include_deleted=include_deleted)
        if pending:
            await pending.pop()()
        return account

    monkeypatch.setattr(account_repository, "find_by_id", read_then_interleave)


class TestProfileUpdate:
    @pytest.mark.asyncio
    async def test_keeps_concurrent_verification(
        self, identity, isolated_identity, account_repository, monkeypatch
    ):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)

        async def verify():
            await identity.verify_email(alice.verification_token)

        _interleave_after_first_read(monkeypatch, account_repository, verify)

        updated = await isolated_identity.update_profile(alice.id, locale="de")

        assert updated.locale == "de"
        assert updated.is_verified is True
        stored = await identity.get_account(alice.id)
        assert stored.is_verified is True
        assert stored.locale == "de"

    @pytest.mark.asyncio
    async def test_keeps_concurrent_password_reset(
        self, identity, isolated_identity, account_repository, monkeypatch
    ):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)
        ticket = await identity.request_password_reset("alice")

        async def reset():
            await identity.reset_password(ticket.token, NEW_PASSWORD)

        _interleave_after_first_read(monkeypatch, account_repository, reset)

        await isolated_identity.update_profile(alice.id, locale="de")

        await identity.authenticate("alice", NEW_PASSWORD)
        with pytest.raises(InvalidCredentialsError):
            await identity.authenticate("alice", ALICE_PASSWORD)
        with pytest.raises(InvalidTokenError):
            await identity.reset_password(ticket.token, "An0ther#Secret")

    @pytest.mark.asyncio
    async def test_concurrent_delete_is_not_undone(
        self, identity, isolated_identity, account_repository, monkeypatch
    ):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)

        async def delete():
            await identity.delete_account(alice.id)

        _interleave_after_first_read(monkeypatch, account_repository, delete)

        with pytest.raises(NotFoundError):
            await isolated_identity.update_profile(alice.id, locale="de")

        stored = await identity.accounts.get(alice.id, include_deleted=True)
        assert stored.is_deleted is True
        assert stored.locale == "en"


class TestDeletedAccountSessions:
    @pytest.mark.asyncio
    async def test_delete_between_password_check_and_session_insert(
        self, identity, isolated_identity, session_repository, monkeypatch
    ):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)
        add = session_repository.add

        async def delete_then_add(session):
            await identity.accounts.delete(alice.id)
            return await add(session)

        monkeypatch.setattr(session_repository, "add", delete_then_add)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await isolated_identity.login("alice", ALICE_PASSWORD, "10.0.0.1", "Firefox")

        assert exc_info.value.reason == CredentialFailure.ACCOUNT_NOT_FOUND
        assert await identity.sessions.list_sessions(alice.id, include_expired=True) == []

    @pytest.mark.asyncio
    async def test_deleted_account_cannot_refresh_unrevoked_session(self, identity):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)
        _, session = await identity.login("alice", ALICE_PASSWORD, "10.0.0.1", "Firefox")

        # Soft delete only, as if the revocation step never ran
        await identity.accounts.delete(alice.id)

        with pytest.raises(NotFoundError):
            await identity.refresh_session(session.refresh_token, "10.0.0.1")

    @pytest.mark.asyncio
    async def test_no_session_for_deleted_account(self, identity):
        alice = await identity.register("alice", "alice@example.com", ALICE_PASSWORD)
        await identity.delete_account(alice.id)

        with pytest.raises(NotFoundError) as exc_info:
            await identity.sessions.create_session(alice.id, "10.0.0.1", "Firefox")

        assert exc_info.value.resource == "account"
        assert await identity.sessions.list_sessions(alice.id, include_expired=True) == []
