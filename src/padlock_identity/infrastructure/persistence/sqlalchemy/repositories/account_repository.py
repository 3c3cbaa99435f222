"""SQLAlchemy implementation of AccountRepository."""

import logging
from datetime import datetime
from typing import Any, Union
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from padlock_identity.domain.account import (
    Account,
    AccountRepository,
    BootstrapAdminClaimedError,
    Email,
    EmailAlreadyExistsError,
    StaleAccountError,
    UsernameAlreadyExistsError,
)
from padlock_identity.domain.shared.time import ensure_tz_aware
from padlock_identity.exceptions import StorageError
from padlock_identity.infrastructure.persistence.sqlalchemy.models import AccountModel
from padlock_identity.infrastructure.persistence.sqlalchemy.repositories.base import (
    SQLAlchemyRepository,
)

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(SQLAlchemyRepository, AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    async def save(self, account: Account) -> None:
        if account.version == 0:
            await self._insert(account)
            logger.info("Created account: %s", account.id)
        else:
            await self._update_versioned(account)
            logger.debug("Updated account: %s", account.id)
        account.advance_version()

    async def find_by_id(
        self, account_id: UUID, include_deleted: bool = False
    ) -> Account | None:
        return await self._find_one(
            AccountModel.id == account_id, include_deleted=include_deleted
        )

    async def find_by_email(
        self, email: Union[str, Email], include_deleted: bool = False
    ) -> Account | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value
        return await self._find_one(
            AccountModel.email == email_value, include_deleted=include_deleted
        )

    async def find_by_username(
        self, username: str, include_deleted: bool = False
    ) -> Account | None:
        return await self._find_one(
            AccountModel.username == username, include_deleted=include_deleted
        )

    async def find_by_verification_token(
        self, token: str, include_deleted: bool = False
    ) -> Account | None:
        return await self._find_one(
            AccountModel.verification_token == token, include_deleted=include_deleted
        )

    async def find_by_password_reset_token(
        self, token_hash: str, include_deleted: bool = False
    ) -> Account | None:
        return await self._find_one(
            AccountModel.password_reset_token == token_hash,
            include_deleted=include_deleted,
        )

    async def find_first(self, include_deleted: bool = False) -> Account | None:
        stmt = select(AccountModel).order_by(AccountModel.created_at, AccountModel.id)
        if not include_deleted:
            stmt = stmt.where(AccountModel.deleted_at.is_(None))
        async with self._transaction() as session:
            model = (await session.execute(stmt.limit(1))).scalars().first()
            return None if model is None else self._map_to_domain(model)

    async def count(self, include_deleted: bool = False) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        if not include_deleted:
            stmt = stmt.where(AccountModel.deleted_at.is_(None))
        async with self._transaction() as session:
            return (await session.execute(stmt)).scalar_one()

    async def mark_verified(self, account_id: UUID, verified_at: datetime) -> bool:
        return await self._update_live(
            account_id,
            AccountModel.verified_at.is_(None),
            verified_at=verified_at,
            updated_at=verified_at,
        )

    async def set_password_reset(
        self,
        account_id: UUID,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        return await self._update_live(
            account_id,
            password_reset_token=token_hash,
            password_reset_expires_at=expires_at,
            updated_at=now,
        )

    async def consume_password_reset(
        self,
        account_id: UUID,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        return await self._update_live(
            account_id,
            AccountModel.password_reset_token == token_hash,
            AccountModel.password_reset_expires_at >= now,
            password_hash=password_hash,
            password_reset_token=None,
            password_reset_expires_at=None,
            updated_at=now,
        )

    async def soft_delete(self, account_id: UUID, now: datetime) -> bool:
        deleted = await self._update_live(account_id, deleted_at=now, updated_at=now)
        if deleted:
            logger.info("Soft-deleted account: %s", account_id)
        return deleted

    async def _insert(self, account: Account) -> None:
        async with self._transaction() as session:
            session.add(self._map_to_model(account))
            try:
                await session.flush()
            except IntegrityError as e:
                raise _map_integrity_error(e, account) from e

    async def _update_versioned(self, account: Account) -> None:
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account.id,
                AccountModel.version == account.version,
                AccountModel.deleted_at.is_(None),
            )
            .values(**self._writable_values(account), version=AccountModel.version + 1)
        )
        async with self._transaction() as session:
            try:
                result = await session.execute(stmt)
            except IntegrityError as e:
                raise _map_integrity_error(e, account) from e
            if result.rowcount != 1:  # type: ignore
                logger.warning("Refused stale write for account %s", account.id)
                raise StaleAccountError(account.id)

    async def _find_one(self, *criteria: Any, include_deleted: bool) -> Account | None:
        stmt = select(AccountModel).where(*criteria)
        if not include_deleted:
            stmt = stmt.where(AccountModel.deleted_at.is_(None))
        async with self._transaction() as session:
            model = (await session.execute(stmt)).scalar_one_or_none()
            return None if model is None else self._map_to_domain(model)

    async def _update_live(self, account_id: UUID, *criteria: Any, **values: Any) -> bool:
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.deleted_at.is_(None),
                *criteria,
            )
            .values(**values, version=AccountModel.version + 1)
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            verification_token=model.verification_token,
            locale=model.locale,
            is_admin=model.is_admin,
            is_bootstrap_admin=bool(model.bootstrap_admin),
            verified_at=_aware(model.verified_at),
            password_reset_token=model.password_reset_token,
            password_reset_expires_at=_aware(model.password_reset_expires_at),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            deleted_at=_aware(model.deleted_at),
            version=model.version,
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            username=account.username,
            email=account.email,
            password_hash=account.password_hash,
            verification_token=account.verification_token,
            verified_at=account.verified_at,
            password_reset_token=account.password_reset_token,
            password_reset_expires_at=account.password_reset_expires_at,
            is_admin=account.is_admin,
            bootstrap_admin=True if account.is_bootstrap_admin else None,
            locale=account.locale,
            created_at=account.created_at,
            updated_at=account.updated_at,
            deleted_at=account.deleted_at,
            version=1,
        )

    def _writable_values(self, account: Account) -> dict[str, Any]:
        # deleted_at and the bootstrap marker only change through their own paths
        return {
            "username": account.username,
            "email": account.email,
            "password_hash": account.password_hash,
            "verification_token": account.verification_token,
            "verified_at": account.verified_at,
            "password_reset_token": account.password_reset_token,
            "password_reset_expires_at": account.password_reset_expires_at,
            "locale": account.locale,
            "updated_at": account.updated_at,
        }


def _aware(value: datetime | None) -> datetime | None:
    return None if value is None else ensure_tz_aware(value)


def _map_integrity_error(error: IntegrityError, account: Account) -> Exception:
    # PostgreSQL names the constraint, SQLite names table.column
    message = str(error.orig)
    if "bootstrap_admin" in message:
        return BootstrapAdminClaimedError()
    if "uq_accounts_email" in message or "accounts.email" in message:
        return EmailAlreadyExistsError(account.email)
    if "uq_accounts_username" in message or "accounts.username" in message:
        return UsernameAlreadyExistsError(account.username)
    logger.error("Unexpected integrity error for account %s: %s", account.id, message)
    return StorageError(cause=error)
