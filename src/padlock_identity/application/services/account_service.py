"""Account lifecycle: registration, credentials, verification and recovery."""

from __future__ import annotations

import logging
from uuid import UUID

from padlock_identity.application.policy import IdentityPolicy
from padlock_identity.domain.account import (
    DEFAULT_LOCALE,
    Account,
    AccountRepository,
    BootstrapAdminClaimedError,
    Email,
    EmailAlreadyExistsError,
    StaleAccountError,
    UsernameAlreadyExistsError,
)
from padlock_identity.domain.shared.time import Clock, SystemClock
from padlock_identity.exceptions import (
    AlreadyVerifiedError,
    ConflictError,
    ConflictField,
    ConflictReason,
    CredentialFailure,
    InternalError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    TokenExpiredError,
    TokenType,
    UnverifiedError,
    ValidationFailedError,
)
from padlock_identity.schemas import PasswordResetTicket
from padlock_identity.services import PasswordHashingService, TokenGenerator, hash_token
from padlock_identity.validation import USERNAME_RULES, RuleSet, password_rules

logger = logging.getLogger(__name__)

# Re-reads allowed when the account changes under a profile update
PROFILE_UPDATE_ATTEMPTS = 3


class AccountService:
    """
    Application service for the account lifecycle.

    Owns the account invariants: unique username and email, the one-time
    bootstrap admin, the one-way verification, single-use password resets
    and soft deletion. Every state transition is a single repository call,
    so a transition either commits completely or not at all.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        token_generator: TokenGenerator | None = None,
        clock: Clock | None = None,
        policy: IdentityPolicy | None = None,
    ):
        self._account_repo = account_repository
        self._password_service = password_service
        self._tokens = token_generator or TokenGenerator()
        self._clock = clock or SystemClock()
        self._policy = policy or IdentityPolicy()
        self._dummy_hash: str | None = None

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
        """Create a new, unverified account.

        The very first account becomes the bootstrap admin.

        Raises
        ------
        ValidationFailedError
            If the email, username or password is not acceptable
        ConflictError
            If the email or username is already taken, live or deactivated
        """
        email_obj = Email(email)
        USERNAME_RULES.validate(username)
        self._password_rules(username, email_obj.value).validate(password)
        await self._ensure_available(email=email_obj, username=username)

        password_hash = self._password_service.hash(password)
        claims_bootstrap = await self._account_repo.count(include_deleted=True) == 0
        account = Account.create(
            username=username,
            email=email_obj,
            password_hash=password_hash,
            verification_token=self._tokens.verification_token(),
            locale=locale,
            is_bootstrap_admin=claims_bootstrap,
            now=self._clock.now(),
        )

        try:
            await self._save(account)
        except BootstrapAdminClaimedError:
            logger.info("Bootstrap admin claimed concurrently, registering %s as user", username)
            account.relinquish_bootstrap_admin()
            await self._save(account)

        logger.info(
            "Account registered: %s (admin: %s)", account.id, account.is_admin
        )
        return account

    async def authenticate(self, login: str, password: str) -> Account:
        """Check a username or email and password pair.

        Raises
        ------
        InvalidCredentialsError
            For an unknown login and for a wrong password alike
        UnverifiedError
            If verified emails are required and this one is not
        """
        account = await self.find_by_login(login)
        if account is None:
            # Keep the timing of unknown logins close to that of wrong passwords
            self._password_service.verify(password, self._get_dummy_hash())
            logger.warning("Failed login for unknown account")
            raise InvalidCredentialsError(CredentialFailure.ACCOUNT_NOT_FOUND)

        if not self._password_service.verify(password, account.password_hash):
            logger.warning("Failed login for account %s", account.id)
            raise InvalidCredentialsError(CredentialFailure.PASSWORD_MISMATCH)

        if self._policy.require_verified_email and not account.is_verified:
            raise UnverifiedError

        if self._password_service.needs_rehash(account.password_hash):
            account.change_password(
                self._password_service.hash(password), self._clock.now()
            )
            try:
                await self._save(account)
            except StaleAccountError:
                # The next login retries the rehash
                logger.info("Skipped rehash for account %s, it changed meanwhile", account.id)
            else:
                logger.info("Rehashed password for account %s", account.id)

        logger.debug("Account authenticated: %s", account.id)
        return account

    async def verify_email(self, token: str) -> Account:
        """Mark the account holding ``token`` as verified.

        Raises
        ------
        InvalidTokenError
            If no live account holds the token
        AlreadyVerifiedError
            If the account is already verified
        """
        account = await self._account_repo.find_by_verification_token(token)
        if account is None:
            raise InvalidTokenError(TokenType.VERIFICATION)
        if account.is_verified:
            logger.warning("Verification token replayed for account %s", account.id)
            raise AlreadyVerifiedError

        now = self._clock.now()
        if not await self._account_repo.mark_verified(account.id, now):
            # A concurrent verification won
            raise AlreadyVerifiedError

        account.mark_verified(now)
        logger.info("Email verified for account %s", account.id)
        return account

    async def request_password_reset(self, login: str) -> PasswordResetTicket:
        """Issue a password reset token, replacing any pending one.

        Raises
        ------
        InvalidCredentialsError
            If no live account matches ``login``. Callers that must not
            reveal which accounts exist should swallow this.
        """
        account = await self.find_by_login(login)
        if account is None:
            logger.debug("Password reset requested for unknown login")
            raise InvalidCredentialsError(CredentialFailure.ACCOUNT_NOT_FOUND)

        raw_token = self._tokens.password_reset_token()
        token_hash = hash_token(raw_token)
        now = self._clock.now()
        expires_at = now + self._policy.password_reset_ttl

        if not await self._account_repo.set_password_reset(
            account.id, token_hash, expires_at, now
        ):
            raise NotFoundError("account", account.id)

        account.start_password_reset(token_hash, expires_at, now)
        logger.info("Password reset issued for account %s", account.id)
        return PasswordResetTicket(token=raw_token, expires_at=expires_at, account=account)

    async def reset_password(self, token: str, new_password: str) -> Account:
        """Set a new password using a reset token.

        Raises
        ------
        InvalidTokenError
            If the token is unknown or was already used
        TokenExpiredError
            If the token expired
        ValidationFailedError
            If the new password is not acceptable
        """
        token_hash = hash_token(token)
        account = await self._account_repo.find_by_password_reset_token(token_hash)
        if account is None:
            raise InvalidTokenError(TokenType.PASSWORD_RESET)

        now = self._clock.now()
        if account.password_reset_expired(now):
            logger.warning("Expired password reset token used for account %s", account.id)
            raise TokenExpiredError(TokenType.PASSWORD_RESET)

        self._password_rules(account.username, account.email).validate(new_password)
        password_hash = self._password_service.hash(new_password)

        if not await self._account_repo.consume_password_reset(
            account.id, token_hash, password_hash, now
        ):
            logger.warning("Password reset token consumed concurrently for %s", account.id)
            raise InvalidTokenError(TokenType.PASSWORD_RESET)

        account.complete_password_reset(password_hash, now)
        logger.info("Password reset completed for account %s", account.id)
        return account

    async def update_profile(  # noqa: PLR0913
        self,
        account_id: UUID,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
        locale: str | None = None,
    ) -> Account:
        """Change any of username, email, password and locale.

        A new email has to be verified again. Values equal to the current
        ones are not conflicts.

        Raises
        ------
        NotFoundError
            If the account does not exist or is deleted
        ValidationFailedError
            If a new value is not acceptable
        ConflictError
            If the new username or email belongs to another account
        InternalError
            If the account kept changing between reading and writing it
        """
        for attempt in range(1, PROFILE_UPDATE_ATTEMPTS + 1):
            account = await self.get(account_id)
            await self._apply_profile_changes(account, username, email, password, locale)
            try:
                await self._save(account)
            except StaleAccountError:
                logger.info(
                    "Account %s changed during profile update (attempt %d)",
                    account_id,
                    attempt,
                )
                continue

            logger.info("Profile updated for account %s", account.id)
            return account

        logger.error("Giving up profile update for account %s", account_id)
        raise InternalError(f"Account {account_id} kept changing during profile update")

    async def _apply_profile_changes(  # noqa: PLR0913
        self,
        account: Account,
        username: str | None,
        email: str | None,
        password: str | None,
        locale: str | None,
    ) -> None:
        new_username = account.username if username is None else username
        new_email = account.email_obj if email is None else Email(email)
        username_changed = new_username != account.username
        email_changed = new_email != account.email_obj

        if username_changed:
            USERNAME_RULES.validate(new_username)
        if password is not None:
            self._password_rules(new_username, new_email.value).validate(password)

        await self._ensure_available(
            email=new_email if email_changed else None,
            username=new_username if username_changed else None,
            exclude_id=account.id,
        )

        now = self._clock.now()
        if username_changed:
            account.change_username(new_username, now)
        if email_changed:
            account.change_email(new_email, self._tokens.verification_token(), now)
        if password is not None:
            account.change_password(self._password_service.hash(password), now)
        if locale is not None:
            account.change_locale(locale, now)

    async def delete(self, account_id: UUID) -> None:
        """Soft-delete an account.

        Raises
        ------
        NotFoundError
            If the account does not exist or is already deleted
        """
        if not await self._account_repo.soft_delete(account_id, self._clock.now()):
            raise NotFoundError("account", account_id)
        logger.info("Account deleted: %s", account_id)

    async def get(self, account_id: UUID, include_deleted: bool = False) -> Account:
        account = await self._account_repo.find_by_id(
            account_id, include_deleted=include_deleted
        )
        if account is None:
            raise NotFoundError("account", account_id)
        return account

    async def find_by_login(self, login: str) -> Account | None:
        """Look up a live account by username, then by email."""
        account = await self._account_repo.find_by_username(login)
        if account is not None:
            return account

        try:
            email = Email(login)
        except ValidationFailedError:
            return None
        return await self._account_repo.find_by_email(email)

    def _password_rules(self, username: str, email: str) -> RuleSet:
        return password_rules(
            similar_to=(username, email),
            threshold=self._policy.similarity_threshold,
        )

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_service.hash(self._tokens.refresh_token())
        return self._dummy_hash

    async def _ensure_available(
        self,
        email: Email | None = None,
        username: str | None = None,
        exclude_id: UUID | None = None,
    ) -> None:
        # Deleted accounts keep their email and username
        if email is not None:
            existing = await self._account_repo.find_by_email(email, include_deleted=True)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(ConflictField.EMAIL, _conflict_reason(existing))

        if username is not None:
            existing = await self._account_repo.find_by_username(
                username, include_deleted=True
            )
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(ConflictField.USERNAME, _conflict_reason(existing))

    async def _save(self, account: Account) -> None:
        try:
            await self._account_repo.save(account)
        except EmailAlreadyExistsError as e:
            raise ConflictError(ConflictField.EMAIL, ConflictReason.EXISTS) from e
        except UsernameAlreadyExistsError as e:
            raise ConflictError(ConflictField.USERNAME, ConflictReason.EXISTS) from e


def _conflict_reason(account: Account) -> ConflictReason:
    if account.is_deleted:
        return ConflictReason.DEACTIVATED
    return ConflictReason.EXISTS
