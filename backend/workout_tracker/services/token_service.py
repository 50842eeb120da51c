"""Bearer token lifecycle: issue, resolve, revoke.

Lifecycle of a token:
    requested -> generated (random secret + digest)
              -> persisted (digest, owner, expiry, scope)
              -> valid until expiry, then inert

Only the SHA-256 digest is persisted. A database leak therefore exposes no
usable tokens. Expired rows are not purged on read; every lookup filters
on expiry, and delete_expired() exists for periodic housekeeping.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from workout_tracker.core.auth import generate_token_plaintext, hash_token
from workout_tracker.domain import Token, User
from workout_tracker.repositories.base import TokenStore, UserStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def generate_token(user_id: int, ttl: timedelta, scope: str, now: datetime) -> Token:
    """Build a new token with its plaintext populated.

    Args:
        user_id: Owner of the token.
        ttl: Lifetime from ``now``.
        scope: Purpose the token is valid for.
        now: Issue time.

    Returns:
        Token with plaintext, hash, and expiry = now + ttl.
    """
    plaintext = generate_token_plaintext()
    return Token(
        plaintext=plaintext,
        hash=hash_token(plaintext),
        user_id=user_id,
        expiry=now + ttl,
        scope=scope,
    )


class TokenService:
    """Issues and resolves opaque bearer tokens.

    Args:
        token_store: Persistence for token digests.
        user_store: Used to resolve a digest back to its owner.
        clock: Returns the current UTC time. Injected so tests can move
            time forward without sleeping.
    """

    def __init__(
        self,
        token_store: TokenStore,
        user_store: UserStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._token_store = token_store
        self._user_store = user_store
        self._clock = clock

    async def create_token(self, user_id: int, ttl: timedelta, scope: str) -> Token:
        """Issue and persist a new token.

        The returned Token is the only place the plaintext ever exists
        server-side.

        Args:
            user_id: Owner of the token.
            ttl: Lifetime of the token.
            scope: Purpose the token is valid for.

        Returns:
            Persisted Token with plaintext populated.

        Raises:
            PersistenceError: If the digest could not be stored. No token is
                returned in that case.
        """
        token = generate_token(user_id, ttl, scope, self._clock())
        await self._token_store.insert(token)
        logger.debug("Issued %s token for user %s", scope, user_id)
        return token

    async def resolve_token(self, plaintext: str, scope: str) -> User | None:
        """Find the user a presented token belongs to.

        Args:
            plaintext: Token as presented by the client.
            scope: Scope the caller requires.

        Returns:
            Owning User if the token exists, has ``scope``, and has not
            expired (expiry strictly after now). None otherwise.
        """
        return await self._user_store.get_user_for_token(
            scope, hash_token(plaintext), self._clock()
        )

    async def delete_all_tokens_for_user(self, user_id: int, scope: str) -> None:
        """Revoke every token of a user in a scope. Idempotent."""
        deleted = await self._token_store.delete_all_tokens_for_user(user_id, scope)
        logger.debug("Revoked %d %s token(s) for user %s", deleted, scope, user_id)

    async def delete_expired(self) -> int:
        """Purge tokens that expired before now.

        Returns:
            Number of purged tokens.
        """
        return await self._token_store.delete_expired(self._clock())
