"""Shared transaction handling for the SQLAlchemy repositories."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from padlock_identity.exceptions import StorageError

logger = logging.getLogger(__name__)


class SQLAlchemyRepository:
    """Runs every repository call in its own transaction.

    The transaction commits when the block exits normally and rolls back on
    any exception, cancellation included. Database errors leave as
    ``StorageError``.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_maker.begin() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Database operation failed: %s", e)
            raise StorageError(cause=e) from e
