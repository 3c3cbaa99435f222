"""Identity service: the use cases exposed to callers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from padlock_identity.application.policy import IdentityPolicy
from padlock_identity.application.ports import Mailer
from padlock_identity.application.services.account_service import AccountService
from padlock_identity.application.services.session_service import SessionService
from padlock_identity.domain.account import DEFAULT_LOCALE, Account, AccountRepository
from padlock_identity.domain.session import Session, SessionKind, SessionRepository
from padlock_identity.domain.shared.time import Clock, SystemClock
from padlock_identity.exceptions import (
    AlreadyVerifiedError,
    CredentialFailure,
    InvalidCredentialsError,
    MailDeliveryError,
    NotFoundError,
)
from padlock_identity.schemas import PasswordResetTicket
from padlock_identity.services import PasswordHashingService, TokenGenerator

logger = logging.getLogger(__name__)

VERIFY_EMAIL_SUBJECT = "email.verify.subject"
VERIFY_EMAIL_TEMPLATE = "verify_email"
RESET_PASSWORD_SUBJECT = "email.reset.subject"
RESET_PASSWORD_TEMPLATE = "reset_password"


class IdentityService:
    """
    Composition root of the identity core.

    Orchestrates the account lifecycle and the session manager and sends
    the notification mails. Mails go out after the state change committed;
    a delivery failure is reported as ``MailDeliveryError`` carrying the
    result of the committed operation, never undone.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        session_repository: SessionRepository,
        mailer: Mailer,
        password_service: PasswordHashingService | None = None,
        token_generator: TokenGenerator | None = None,
        clock: Clock | None = None,
        policy: IdentityPolicy | None = None,
    ):
        self._policy = policy or IdentityPolicy()
        self._clock = clock or SystemClock()
        tokens = token_generator or TokenGenerator()
        self._accounts = AccountService(
            account_repository=account_repository,
            password_service=password_service or PasswordHashingService(),
            token_generator=tokens,
            clock=self._clock,
            policy=self._policy,
        )
        self._sessions = SessionService(
            session_repository=session_repository,
            token_generator=tokens,
            clock=self._clock,
            policy=self._policy,
        )
        self._mailer = mailer

    @property
    def accounts(self) -> AccountService:
        return self._accounts

    @property
    def sessions(self) -> SessionService:
        return self._sessions

    @property
    def policy(self) -> IdentityPolicy:
        return self._policy

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        locale: str = DEFAULT_LOCALE,
    ) -> Account:
        account = await self._accounts.register(username, email, password, locale)
        self._send_verification(account, result=account)
        return account

    async def authenticate(self, login: str, password: str) -> Account:
        return await self._accounts.authenticate(login, password)

    async def login(
        self,
        login: str,
        password: str,
        client_ip: str,
        user_agent: str,
        kind: SessionKind = SessionKind.USER,
    ) -> tuple[Account, Session]:
        """Authenticate and open a new session for the account."""
        account = await self._accounts.authenticate(login, password)
        try:
            session = await self._sessions.create_session(
                account.id, client_ip, user_agent, kind
            )
        except NotFoundError as e:
            # Deleted between the password check and the session insert
            logger.warning("Account %s deleted during login", account.id)
            raise InvalidCredentialsError(CredentialFailure.ACCOUNT_NOT_FOUND) from e
        logger.info("Account logged in: %s", account.id)
        return account, session

    async def verify_email(self, token: str) -> Account:
        return await self._accounts.verify_email(token)

    async def resend_verification(self, login: str) -> None:
        """Send the verification mail again.

        Raises
        ------
        InvalidCredentialsError
            If no live account matches ``login``
        AlreadyVerifiedError
            If the account is verified already
        """
        account = await self._accounts.find_by_login(login)
        if account is None:
            raise InvalidCredentialsError(CredentialFailure.ACCOUNT_NOT_FOUND)
        if account.is_verified:
            raise AlreadyVerifiedError
        self._send_verification(account, result=None)

    async def request_password_reset(self, login: str) -> PasswordResetTicket:
        ticket = await self._accounts.request_password_reset(login)
        account = ticket.account
        self._send(
            result=ticket,
            account=account,
            subject_key=RESET_PASSWORD_SUBJECT,
            body_template=RESET_PASSWORD_TEMPLATE,
            data={
                "username": account.username,
                "link": self._policy.password_reset_link(ticket.token),
                "expires_at": ticket.expires_at,
                "locale": account.locale,
            },
        )
        return ticket

    async def reset_password(self, token: str, new_password: str) -> Account:
        return await self._accounts.reset_password(token, new_password)

    async def refresh_session(self, refresh_token: str, client_ip: str) -> Session:
        return await self._sessions.refresh_session(refresh_token, client_ip)

    async def revoke_session(self, session_id: UUID) -> None:
        await self._sessions.revoke_session(session_id)

    async def logout(self, refresh_token: str) -> None:
        await self._sessions.revoke_by_token(refresh_token)

    async def revoke_all_sessions(self, account_id: UUID) -> int:
        return await self._sessions.revoke_all_for_account(account_id)

    async def list_sessions(self, account_id: UUID) -> list[Session]:
        return await self._sessions.list_sessions(account_id)

    async def update_profile(  # noqa: PLR0913
        self,
        account_id: UUID,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
        locale: str | None = None,
    ) -> Account:
        previous_email = (await self._accounts.get(account_id)).email
        account = await self._accounts.update_profile(
            account_id,
            username=username,
            email=email,
            password=password,
            locale=locale,
        )
        if account.email != previous_email:
            self._send_verification(account, result=account)
        return account

    async def delete_account(self, account_id: UUID) -> None:
        await self._accounts.delete(account_id)
        await self._sessions.revoke_all_for_account(account_id)

    async def get_account(self, account_id: UUID) -> Account:
        return await self._accounts.get(account_id)

    def _send_verification(self, account: Account, result: Any) -> None:
        self._send(
            result=result,
            account=account,
            subject_key=VERIFY_EMAIL_SUBJECT,
            body_template=VERIFY_EMAIL_TEMPLATE,
            data={
                "username": account.username,
                "link": self._policy.verification_link(account.verification_token),
                "locale": account.locale,
            },
        )

    def _send(
        self,
        result: Any,
        account: Account,
        subject_key: str,
        body_template: str,
        data: Mapping[str, Any],
    ) -> None:
        try:
            self._mailer.send(account.email, subject_key, body_template, data)
        except Exception as e:
            logger.error(
                "Failed to send %s mail for account %s: %s", body_template, account.id, e
            )
            raise MailDeliveryError(result, cause=e) from e
        logger.info("Sent %s mail for account %s", body_template, account.id)
