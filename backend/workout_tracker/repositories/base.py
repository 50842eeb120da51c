"""Abstract storage capabilities.

Services and endpoints depend on these interfaces only. Each has one
SQLAlchemy adapter (see the sibling *_repository modules); swapping the
backend means adding another adapter, not touching callers.

WHY ABSTRACT BASE CLASSES:
- Core logic (token lifecycle, workout aggregate) stays backend-agnostic
- Tests can substitute fakes without a database
- Every adapter is held to the same error contract

Error contract for every adapter:
- NotFoundError when the addressed row does not exist (where documented)
- ConflictError for unique-username violations
- PersistenceError for any other storage failure
- Every operation is one transaction: all of it commits or none of it does
"""

from abc import ABC, abstractmethod
from datetime import datetime

from workout_tracker.domain import Token, User, Workout


class UserStore(ABC):
    """Persistence for user identity and password hashes."""

    @abstractmethod
    async def create_user(self, user: User, password_hash: str) -> User:
        """Insert a user.

        Returns:
            User with id and timestamps populated.

        Raises:
            ConflictError: If the username is taken.
            PersistenceError: On any other storage failure.
        """

    @abstractmethod
    async def get_user_by_username(
        self, username: str
    ) -> tuple[User, str] | None:
        """Look up a user and their password hash by username.

        Returns:
            (user, password_hash) if found, None otherwise.
        """

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> User | None:
        """Fetch a user by primary key."""

    @abstractmethod
    async def update_user(
        self, user: User, password_hash: str | None = None
    ) -> User:
        """Replace username, email, and bio (and the hash, if given).

        Raises:
            NotFoundError: If no user has ``user.id``.
            ConflictError: If the new username is taken.
        """

    @abstractmethod
    async def get_user_for_token(
        self, scope: str, token_hash: str, now: datetime
    ) -> User | None:
        """Resolve a token digest to its owner.

        Matches only when the digest and scope match and expiry > now.

        Returns:
            Owning User, or None when no live token matches.
        """


class TokenStore(ABC):
    """Persistence for bearer-token digests."""

    @abstractmethod
    async def insert(self, token: Token) -> None:
        """Store {hash, user_id, expiry, scope}. Plaintext is never stored.

        Raises:
            PersistenceError: If the insert fails.
        """

    @abstractmethod
    async def delete_all_tokens_for_user(self, user_id: int, scope: str) -> int:
        """Revoke every token of ``user_id`` in ``scope``.

        Idempotent: deleting nothing is success.

        Returns:
            Number of deleted rows.
        """

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Remove tokens with expiry <= now (housekeeping).

        Returns:
            Number of deleted rows.
        """


class WorkoutStore(ABC):
    """Persistence for the workout aggregate (workout + ordered entries)."""

    @abstractmethod
    async def create_workout(self, workout: Workout) -> Workout:
        """Insert the workout and every entry in one transaction.

        If any entry fails, nothing is committed.

        Returns:
            The aggregate with ids, workout_id, and timestamps populated.
        """

    @abstractmethod
    async def get_workout_by_id(self, workout_id: int) -> Workout:
        """Fetch a workout with entries ordered by order_index.

        Raises:
            NotFoundError: If the workout does not exist.
        """

    @abstractmethod
    async def update_workout(
        self, workout: Workout, *, replace_entries: bool = True
    ) -> Workout:
        """Overwrite all mutable workout fields.

        Args:
            workout: Workout carrying the full new state.
            replace_entries: When True, existing entries are deleted and
                ``workout.entries`` inserted in their place. When False,
                stored entries are kept and returned as-is.

        Raises:
            NotFoundError: If the workout does not exist.
        """

    @abstractmethod
    async def delete_workout(self, workout_id: int) -> None:
        """Delete a workout (entries go with it via ON DELETE CASCADE).

        Raises:
            NotFoundError: If the workout does not exist.
        """

    @abstractmethod
    async def get_workout_owner(self, workout_id: int) -> int | None:
        """Return the owning user id of a workout.

        Raises:
            NotFoundError: If the workout does not exist.
        """
