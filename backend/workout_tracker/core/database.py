"""Async database engine, session factory, and transaction scope.

Configures the SQLAlchemy async engine with connection pooling and provides
the unit-of-work helper every storage adapter runs its statements in.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from workout_tracker.core.config import settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for SQLite connections.

    SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless the
    pragma is set on every new connection. No-op for other dialects.

    Args:
        engine: Async engine to configure.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine() -> AsyncEngine:
    """Create the application engine from settings."""
    engine = create_async_engine(
        settings.database_url,
        echo=settings.environment == "development",
        pool_pre_ping=True,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


engine = create_engine()

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency that provides the session factory stores are built on."""
    return async_session_factory


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    timeout: float | None = None,
) -> AsyncIterator[AsyncSession]:
    """Open a session and run the block inside a single transaction.

    Commits when the block exits normally. Any exception, including
    cancellation or the timeout expiring, rolls the transaction back and
    the session (with its cursors) is closed on every exit path.

    Args:
        session_factory: Factory producing sessions bound to the engine.
        timeout: Seconds before the operation is cancelled. None disables it.

    Yields:
        Session with an open transaction.
    """
    async with asyncio.timeout(timeout), session_factory.begin() as session:
        yield session
