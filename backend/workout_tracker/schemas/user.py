"""User registration and profile schemas.

UserRead is the only outward shape of a user. It has no password field,
so a hash cannot be serialized by accident.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from workout_tracker.core.auth import BCRYPT_MAX_PASSWORD_BYTES
from workout_tracker.domain import User


class RegisterUserRequest(BaseModel):
    """Request body for POST /users."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)
    bio: str = Field(default="", max_length=2000)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        """Reject usernames made only of whitespace."""
        if not value.strip():
            msg = "username must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(value.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            msg = f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            raise ValueError(msg)
        return value

    def to_domain(self) -> User:
        return User(username=self.username, email=str(self.email), bio=self.bio)


class UserRead(BaseModel):
    """Public user representation.

    Attributes:
        id: User id.
        username: Login name.
        email: Contact address.
        bio: Profile blurb.
        created_at: Registration time.
        updated_at: Last profile change.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    bio: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
