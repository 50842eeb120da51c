"""Token model - bearer token digests.

Only the SHA-256 digest of a token is stored; the plaintext exists in the
response that issued it and nowhere else. Expired rows are inert: every
lookup filters on expiry.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from workout_tracker.models.base import Base


class Token(Base):
    """Bearer token record.

    Attributes:
        hash: SHA-256 hex digest of the plaintext token (primary key).
        user_id: FK to users. Tokens go with their user.
        expiry: Token is valid strictly before this instant.
        scope: Purpose discriminator (e.g., "authentication").
    """

    __tablename__ = "tokens"
    __table_args__ = (Index("ix_tokens_user_id_scope", "user_id", "scope"),)

    hash: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    expiry: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    scope: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
