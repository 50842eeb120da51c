"""Authentication token request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateAuthenticationTokenRequest(BaseModel):
    """Request body for POST /tokens/authentication."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)


class AuthenticationTokenRead(BaseModel):
    """Freshly issued token. Returned once; the server keeps only a digest.

    Attributes:
        auth_token: Plaintext bearer token.
        expiry: Instant after which the token stops working.
    """

    auth_token: str
    expiry: datetime
