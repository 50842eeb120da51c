"""User model - authentication foundation.

No FK dependencies. Tokens and workouts reference users.id.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workout_tracker.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User account for authentication.

    Attributes:
        id: Integer primary key.
        username: Unique login name.
        email: Contact email address.
        password_hash: bcrypt hash. Never serialized outward.
        bio: Free-text profile blurb.
        created_at: Account creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    bio: Mapped[str] = mapped_column(
        Text(),
        nullable=False,
        default="",
        server_default="",
    )
