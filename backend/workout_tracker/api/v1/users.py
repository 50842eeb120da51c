"""User registration and profile endpoints.

- POST /users: unauthenticated, rate limited, bcrypt cost 12
- GET /users/me: the authenticated caller
"""

from fastapi import APIRouter, Request

from workout_tracker.api.deps import CurrentUser, UserStoreDep
from workout_tracker.core.config import settings
from workout_tracker.core.rate_limiting import limiter
from workout_tracker.core.responses import DataResponse
from workout_tracker.schemas.user import RegisterUserRequest, UserRead
from workout_tracker.services.authentication import register_user

router = APIRouter()


@router.post("", status_code=201)
@limiter.limit(lambda: settings.rate_limit_auth)
async def register(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: RegisterUserRequest,
    user_store: UserStoreDep,
) -> DataResponse[UserRead]:
    """Register a new user.

    Rate limit: settings.rate_limit_auth per IP.
    Returns 409 USERNAME_TAKEN when the username exists.
    """
    user = await register_user(user_store, body.to_domain(), body.password)
    return DataResponse(data=UserRead.model_validate(user))


@router.get("/me")
async def get_me(user: CurrentUser) -> DataResponse[UserRead]:
    """Return the authenticated user."""
    return DataResponse(data=UserRead.model_validate(user))
