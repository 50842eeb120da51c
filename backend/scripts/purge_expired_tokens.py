"""Delete expired bearer tokens.

Expired tokens are already rejected on every lookup; this only keeps the
tokens table from growing without bound. Run periodically (e.g., cron):

    python scripts/purge_expired_tokens.py
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workout_tracker.core.database import create_engine
from workout_tracker.repositories.token_repository import TokenRepository
from workout_tracker.repositories.user_repository import UserRepository
from workout_tracker.services.token_service import TokenService

logger = logging.getLogger(__name__)


async def run_purge(factory: async_sessionmaker[AsyncSession]) -> int:
    """Purge expired tokens through the token service.

    Args:
        factory: Session factory for the target database.

    Returns:
        Number of deleted tokens.
    """
    service = TokenService(TokenRepository(factory), UserRepository(factory))
    deleted = await service.delete_expired()
    logger.info("Purged %d expired token(s)", deleted)
    return deleted


async def main() -> None:
    """CLI entry point: purge against the configured database."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = create_engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        await run_purge(factory)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
