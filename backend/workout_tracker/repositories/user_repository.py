"""SQLAlchemy adapter for UserStore.

Provides database access for the users table, including the token join
used to authenticate bearer tokens.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from workout_tracker import models
from workout_tracker.core.errors import ConflictError, NotFoundError
from workout_tracker.domain import User
from workout_tracker.repositories.base import UserStore
from workout_tracker.repositories.sqlalchemy_store import SQLAlchemyStore


def _to_domain(row: models.User) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        bio=row.bio,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _username_taken() -> ConflictError:
    return ConflictError(
        code="USERNAME_TAKEN",
        message="A user with that username already exists",
    )


class UserRepository(SQLAlchemyStore, UserStore):
    """UserStore backed by the users and tokens tables."""

    async def create_user(self, user: User, password_hash: str) -> User:
        """Insert a user and return it with generated fields.

        Args:
            user: User to create (id ignored).
            password_hash: bcrypt hash of the user's password.

        Returns:
            Created User with id, created_at, and updated_at populated.

        Raises:
            ConflictError: If the username already exists.
        """
        async with self._transaction("create_user") as db:
            row = models.User(
                username=user.username,
                email=user.email,
                password_hash=password_hash,
                bio=user.bio,
            )
            db.add(row)
            try:
                await db.flush()
            except IntegrityError as exc:
                raise _username_taken() from exc
            await db.refresh(row)
            return _to_domain(row)

    async def get_user_by_username(
        self, username: str
    ) -> tuple[User, str] | None:
        """Fetch a user and password hash by exact username.

        Returns:
            (User, password_hash) if found, None otherwise.
        """
        async with self._transaction("get_user_by_username") as db:
            stmt = select(models.User).where(models.User.username == username)
            result = await db.execute(stmt)
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return _to_domain(row), row.password_hash

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Fetch a user by primary key.

        Returns:
            User if found, None otherwise.
        """
        async with self._transaction("get_user_by_id") as db:
            row = await db.get(models.User, user_id)
            return _to_domain(row) if row is not None else None

    async def update_user(
        self, user: User, password_hash: str | None = None
    ) -> User:
        """Replace username, email, bio, and optionally the password hash.

        Args:
            user: User carrying the new values; ``user.id`` selects the row.
            password_hash: New bcrypt hash, or None to keep the current one.

        Returns:
            Updated User with the new updated_at.

        Raises:
            NotFoundError: If the user does not exist.
            ConflictError: If the new username is taken.
        """
        if user.id is None:
            raise NotFoundError("User")

        async with self._transaction("update_user") as db:
            row = await db.get(models.User, user.id)
            if row is None:
                raise NotFoundError("User", str(user.id))

            row.username = user.username
            row.email = user.email
            row.bio = user.bio
            if password_hash is not None:
                row.password_hash = password_hash
            try:
                await db.flush()
            except IntegrityError as exc:
                raise _username_taken() from exc
            await db.refresh(row)
            return _to_domain(row)

    async def get_user_for_token(
        self, scope: str, token_hash: str, now: datetime
    ) -> User | None:
        """Resolve a live token digest to its owner.

        Args:
            scope: Required token scope.
            token_hash: SHA-256 hex digest of the presented token.
            now: Current time; the token must expire strictly after it.

        Returns:
            Owning User, or None when no live token matches.
        """
        async with self._transaction("get_user_for_token") as db:
            stmt = (
                select(models.User)
                .join(models.Token, models.Token.user_id == models.User.id)
                .where(
                    models.Token.hash == token_hash,
                    models.Token.scope == scope,
                    models.Token.expiry > now,
                )
            )
            result = await db.execute(stmt)
            row = result.scalar_one_or_none()
            return _to_domain(row) if row is not None else None
