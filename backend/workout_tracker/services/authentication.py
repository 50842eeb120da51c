"""Username/password login that ends in an authentication token.

Flow:
1. Look up the user by username
2. Verify the password with bcrypt
3. Issue a 24h token scoped "authentication"

An unknown username and a wrong password produce the same
InvalidCredentialsError so the response cannot be used to enumerate
usernames. The distinct cause is logged for operators. A verification
failure that is not a mismatch (corrupt stored hash) is an InternalError.
"""

from datetime import timedelta

import structlog

from workout_tracker.core.auth import (
    burn_dummy_check,
    hash_password,
    password_matches,
)
from workout_tracker.core.config import settings
from workout_tracker.core.errors import (
    HashingError,
    InternalError,
    InvalidCredentialsError,
)
from workout_tracker.domain import SCOPE_AUTHENTICATION, Token, User
from workout_tracker.repositories.base import UserStore
from workout_tracker.services.token_service import TokenService

logger = structlog.get_logger()


def authentication_token_ttl() -> timedelta:
    """Lifetime of login tokens (24 hours unless configured otherwise)."""
    return timedelta(hours=settings.auth_token_ttl_hours)


async def register_user(user_store: UserStore, user: User, password: str) -> User:
    """Hash the password and create the user.

    Args:
        user_store: Persistence for users.
        user: Username, email, and bio of the new user.
        password: Plaintext password.

    Returns:
        Created User.

    Raises:
        InternalError: If the password could not be hashed.
        ConflictError: If the username is taken.
    """
    try:
        password_hash = hash_password(password)
    except HashingError as exc:
        logger.error("Password hashing failed", username=user.username)
        raise InternalError() from exc

    created = await user_store.create_user(user, password_hash)
    logger.info("User registered", user_id=created.id)
    return created


async def authenticate(
    user_store: UserStore,
    token_service: TokenService,
    *,
    username: str,
    password: str,
) -> Token:
    """Exchange a username and password for an authentication token.

    Args:
        user_store: Persistence for users.
        token_service: Issues the token.
        username: Login name.
        password: Plaintext password.

    Returns:
        Token with plaintext populated (scope "authentication").

    Raises:
        InvalidCredentialsError: Unknown username or wrong password.
        InternalError: Stored hash could not be verified.
        PersistenceError: User lookup or token insert failed.
    """
    found = await user_store.get_user_by_username(username)
    if found is None:
        # Security: spend bcrypt time anyway so timing does not reveal
        # whether the username exists.
        burn_dummy_check(password)
        logger.info("Login rejected: unknown username")
        raise InvalidCredentialsError()

    user, password_hash = found
    try:
        matches = password_matches(password, password_hash)
    except HashingError as exc:
        logger.error("Password verification failed", user_id=user.id)
        raise InternalError() from exc

    if not matches:
        logger.info("Login rejected: password mismatch", user_id=user.id)
        raise InvalidCredentialsError()

    assert user.id is not None, "persisted user must have an id"
    return await token_service.create_token(
        user.id, authentication_token_ttl(), SCOPE_AUTHENTICATION
    )
