"""Shared plumbing for the SQLAlchemy store adapters.

Each adapter holds a session factory instead of a session: every store
operation opens its own transaction and closes it before returning, so a
caller can never observe a half-written aggregate or leak a connection.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workout_tracker.core.config import settings
from workout_tracker.core.database import transaction
from workout_tracker.core.errors import PersistenceError

logger = logging.getLogger(__name__)


class SQLAlchemyStore:
    """Base for adapters backed by an async SQLAlchemy engine.

    Args:
        session_factory: Factory for sessions bound to the target engine.
        timeout: Seconds allowed per operation. Defaults to
            settings.database_operation_timeout.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        timeout: float | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._timeout = (
            timeout if timeout is not None else settings.database_operation_timeout
        )

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Run one store operation inside a transaction.

        Domain errors raised inside the block (NotFoundError, ConflictError)
        roll back and propagate unchanged. Database errors and timeouts roll
        back and surface as PersistenceError.

        Args:
            operation: Operation name, used in logs and the raised error.

        Yields:
            Session with an open transaction.
        """
        try:
            async with transaction(self._session_factory, self._timeout) as db:
                yield db
        except SQLAlchemyError as exc:
            logger.error("Storage operation %s failed", operation, exc_info=exc)
            raise PersistenceError(operation) from exc
        except TimeoutError as exc:
            logger.error(
                "Storage operation %s exceeded %.1fs", operation, self._timeout
            )
            raise PersistenceError(operation) from exc
