"""Authentication token endpoints.

- POST /tokens/authentication: username + password -> bearer token (24h)
- DELETE /tokens/authentication: revoke all of the caller's tokens

Security considerations:
- Unknown username and wrong password return the same 401
- bcrypt runs even for unknown usernames (timing)
- The plaintext token appears in this response only
"""

from fastapi import APIRouter, Request, Response

from workout_tracker.api.deps import CurrentUser, TokenServiceDep, UserStoreDep
from workout_tracker.core.config import settings
from workout_tracker.core.rate_limiting import limiter
from workout_tracker.core.responses import DataResponse
from workout_tracker.domain import SCOPE_AUTHENTICATION
from workout_tracker.schemas.token import (
    AuthenticationTokenRead,
    CreateAuthenticationTokenRequest,
)
from workout_tracker.services.authentication import authenticate

router = APIRouter()


@router.post("/authentication", status_code=201)
@limiter.limit(lambda: settings.rate_limit_auth)
async def create_authentication_token(
    request: Request,  # noqa: ARG001 - required by @limiter.limit()
    body: CreateAuthenticationTokenRequest,
    user_store: UserStoreDep,
    token_service: TokenServiceDep,
) -> DataResponse[AuthenticationTokenRead]:
    """Exchange username + password for an authentication token.

    Rate limit: settings.rate_limit_auth per IP.
    """
    token = await authenticate(
        user_store,
        token_service,
        username=body.username,
        password=body.password,
    )
    return DataResponse(
        data=AuthenticationTokenRead(auth_token=token.plaintext, expiry=token.expiry)
    )


@router.delete("/authentication", status_code=204)
async def revoke_authentication_tokens(
    user: CurrentUser,
    token_service: TokenServiceDep,
) -> Response:
    """Log out everywhere: delete every authentication token of the caller."""
    assert user.id is not None, "authenticated user must have an id"
    await token_service.delete_all_tokens_for_user(user.id, SCOPE_AUTHENTICATION)
    return Response(status_code=204)
