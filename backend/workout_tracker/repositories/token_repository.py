"""SQLAlchemy adapter for TokenStore.

Bearer tokens are stored as SHA-256 digests with owner, expiry, and scope.
The plaintext never reaches this module.
"""

from datetime import datetime

from sqlalchemy import delete

from workout_tracker import models
from workout_tracker.domain import Token
from workout_tracker.repositories.base import TokenStore
from workout_tracker.repositories.sqlalchemy_store import SQLAlchemyStore


class TokenRepository(SQLAlchemyStore, TokenStore):
    """TokenStore backed by the tokens table."""

    async def insert(self, token: Token) -> None:
        """Store a token digest.

        Args:
            token: Token whose hash, user_id, expiry, and scope are stored.

        Raises:
            PersistenceError: If the insert fails (e.g., unknown user_id).
        """
        async with self._transaction("insert_token") as db:
            db.add(
                models.Token(
                    hash=token.hash,
                    user_id=token.user_id,
                    expiry=token.expiry,
                    scope=token.scope,
                )
            )
            await db.flush()

    async def delete_all_tokens_for_user(self, user_id: int, scope: str) -> int:
        """Delete every token of a user within a scope.

        Args:
            user_id: Owner of the tokens.
            scope: Scope to revoke.

        Returns:
            Number of deleted rows (0 is success).
        """
        async with self._transaction("delete_all_tokens_for_user") as db:
            stmt = delete(models.Token).where(
                models.Token.user_id == user_id,
                models.Token.scope == scope,
            )
            result = await db.execute(stmt)
            row_count: int = result.rowcount  # type: ignore[attr-defined]
            return row_count

    async def delete_expired(self, now: datetime) -> int:
        """Delete all tokens that are no longer valid at ``now``.

        Returns:
            Number of deleted rows.
        """
        async with self._transaction("delete_expired_tokens") as db:
            stmt = delete(models.Token).where(models.Token.expiry <= now)
            result = await db.execute(stmt)
            row_count: int = result.rowcount  # type: ignore[attr-defined]
            return row_count
