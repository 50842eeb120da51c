"""Shared dependencies for API endpoints.

Store construction and bearer-token authentication.

Authentication rules:
- No Authorization header: the request is Anonymous
- "Authorization: Bearer <token>" with a live "authentication" token:
  the request is Authenticated as the token's owner
- Anything else (malformed header, unknown or expired token): 401

WHY DEPENDENCY INJECTION:
- Consistent auth across all endpoints
- Stores are built from one session factory that tests can override
- Endpoints see only the abstract store interfaces
"""

from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workout_tracker.core.database import get_session_factory
from workout_tracker.core.errors import UnauthorizedError
from workout_tracker.domain import (
    ANONYMOUS,
    SCOPE_AUTHENTICATION,
    Authenticated,
    Identity,
    User,
)
from workout_tracker.repositories.base import TokenStore, UserStore, WorkoutStore
from workout_tracker.repositories.token_repository import TokenRepository
from workout_tracker.repositories.user_repository import UserRepository
from workout_tracker.repositories.workout_repository import WorkoutRepository
from workout_tracker.services.token_service import TokenService

# Generic 401 message. Security: never say WHY a token was rejected.
_INVALID_TOKEN_MESSAGE = "Invalid or missing authentication token"

SessionFactory = Annotated[
    async_sessionmaker[AsyncSession], Depends(get_session_factory)
]


def get_user_store(session_factory: SessionFactory) -> UserStore:
    """Provide the user store."""
    return UserRepository(session_factory)


def get_token_store(session_factory: SessionFactory) -> TokenStore:
    """Provide the token store."""
    return TokenRepository(session_factory)


def get_workout_store(session_factory: SessionFactory) -> WorkoutStore:
    """Provide the workout store."""
    return WorkoutRepository(session_factory)


def get_token_service(
    token_store: Annotated[TokenStore, Depends(get_token_store)],
    user_store: Annotated[UserStore, Depends(get_user_store)],
) -> TokenService:
    """Provide the token service."""
    return TokenService(token_store, user_store)


async def get_identity(
    request: Request,
    response: Response,
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Resolve who is making the request.

    Args:
        request: HTTP request (injected by FastAPI).
        response: Response, used to add ``Vary: Authorization``.
        token_service: Resolves bearer tokens (injected).

    Returns:
        Authenticated(user) or ANONYMOUS.

    Raises:
        UnauthorizedError: Header present but malformed, or token unknown,
            expired, or issued for another scope.
    """
    response.headers["Vary"] = "Authorization"

    header = request.headers.get("Authorization")
    if not header:
        return ANONYMOUS

    scheme, _, plaintext = header.partition(" ")
    if scheme != "Bearer" or not plaintext or " " in plaintext:
        raise UnauthorizedError(_INVALID_TOKEN_MESSAGE)

    user = await token_service.resolve_token(plaintext, SCOPE_AUTHENTICATION)
    if user is None:
        raise UnauthorizedError(_INVALID_TOKEN_MESSAGE)

    return Authenticated(user=user)


def require_user(
    identity: Annotated[Identity, Depends(get_identity)],
) -> User:
    """Reject anonymous requests.

    Returns:
        The authenticated User.

    Raises:
        UnauthorizedError: If the request is anonymous.
    """
    if isinstance(identity, Authenticated):
        return identity.user
    raise UnauthorizedError("You must be authenticated to access this resource")


# Reusable type aliases for dependency injection
CurrentUser = Annotated[User, Depends(require_user)]
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
WorkoutStoreDep = Annotated[WorkoutStore, Depends(get_workout_store)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
