"""SQLAlchemy implementation of SessionRepository."""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select, update

from padlock_identity.domain.session import Session, SessionKind, SessionRepository
from padlock_identity.domain.shared.time import ensure_tz_aware
from padlock_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    SessionModel,
)
from padlock_identity.infrastructure.persistence.sqlalchemy.repositories.base import (
    SQLAlchemyRepository,
)

logger = logging.getLogger(__name__)

_LIVE_ACCOUNT_IDS = select(AccountModel.id).where(AccountModel.deleted_at.is_(None))


class SessionRepositorySQLAlchemy(SQLAlchemyRepository, SessionRepository):
    """SQLAlchemy implementation of the SessionRepository interface."""

    async def add(self, session: Session) -> bool:
        # Locking the account row orders this insert against a soft delete
        owner = (
            select(AccountModel.id)
            .where(
                AccountModel.id == session.account_id,
                AccountModel.deleted_at.is_(None),
            )
            .with_for_update()
        )
        async with self._transaction() as db:
            if (await db.execute(owner)).scalar_one_or_none() is None:
                logger.warning(
                    "Refused session for missing account %s", session.account_id
                )
                return False
            db.add(self._map_to_model(session))
        logger.debug("Stored session: %s", session.id)
        return True

    async def find_by_id(
        self, session_id: UUID, now: datetime, include_expired: bool = False
    ) -> Session | None:
        return await self._find_one(
            SessionModel.id == session_id, now=now, include_expired=include_expired
        )

    async def find_by_refresh_token(
        self, refresh_token: str, now: datetime, include_expired: bool = False
    ) -> Session | None:
        return await self._find_one(
            SessionModel.refresh_token == refresh_token,
            now=now,
            include_expired=include_expired,
        )

    async def list_by_account_id(
        self, account_id: UUID, now: datetime, include_expired: bool = False
    ) -> list[Session]:
        stmt = (
            select(SessionModel)
            .where(SessionModel.account_id == account_id)
            .order_by(SessionModel.created_at, SessionModel.id)
        )
        if not include_expired:
            stmt = stmt.where(SessionModel.expires_at > now)
        async with self._transaction() as db:
            models = (await db.execute(stmt)).scalars().all()
            return [self._map_to_domain(model) for model in models]

    async def rotate(  # noqa: PLR0913
        self,
        session_id: UUID,
        old_token: str,
        new_token: str,
        client_ip: str,
        now: datetime,
        expires_at: datetime,
    ) -> Session | None:
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.refresh_token == old_token,
                SessionModel.expires_at > now,
                SessionModel.account_id.in_(_LIVE_ACCOUNT_IDS),
            )
            .values(
                refresh_token=new_token,
                client_ip=client_ip,
                last_used_at=now,
                expires_at=expires_at,
                updated_at=now,
            )
        )
        async with self._transaction() as db:
            result = await db.execute(stmt)
            if result.rowcount != 1:  # type: ignore
                return None
            model = await db.get(SessionModel, session_id, populate_existing=True)
            return None if model is None else self._map_to_domain(model)

    async def revoke(self, session_id: UUID, now: datetime) -> bool:
        return await self._revoke_live(SessionModel.id == session_id, now=now) == 1

    async def revoke_by_token(self, refresh_token: str, now: datetime) -> bool:
        return (
            await self._revoke_live(SessionModel.refresh_token == refresh_token, now=now)
            == 1
        )

    async def revoke_all_for_account(self, account_id: UUID, now: datetime) -> int:
        return await self._revoke_live(SessionModel.account_id == account_id, now=now)

    async def _find_one(
        self, *criteria: Any, now: datetime, include_expired: bool
    ) -> Session | None:
        stmt = select(SessionModel).where(*criteria)
        if not include_expired:
            stmt = stmt.where(SessionModel.expires_at > now)
        async with self._transaction() as db:
            model = (await db.execute(stmt)).scalar_one_or_none()
            return None if model is None else self._map_to_domain(model)

    async def _revoke_live(self, *criteria: Any, now: datetime) -> int:
        stmt = (
            update(SessionModel)
            .where(*criteria, SessionModel.expires_at > now)
            .values(expires_at=now, updated_at=now)
        )
        async with self._transaction() as db:
            result = await db.execute(stmt)
            return result.rowcount  # type: ignore

    def _map_to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            account_id=model.account_id,
            refresh_token=model.refresh_token,
            kind=SessionKind(model.kind),
            client_ip=model.client_ip,
            user_agent=model.user_agent,
            created_at=ensure_tz_aware(model.created_at),
            last_used_at=ensure_tz_aware(model.last_used_at),
            expires_at=ensure_tz_aware(model.expires_at),
        )

    def _map_to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            account_id=session.account_id,
            refresh_token=session.refresh_token,
            kind=session.kind.value,
            client_ip=session.client_ip,
            user_agent=session.user_agent,
            created_at=session.created_at,
            updated_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at,
        )