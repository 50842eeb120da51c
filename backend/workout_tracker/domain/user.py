"""User identity and the per-request authentication state."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """A registered user.

    The password hash never lives on this type; stores keep it apart so it
    cannot leak into a serialized response.

    Attributes:
        id: Integer primary key (None until persisted).
        username: Unique login name.
        email: Contact address.
        bio: Free-text profile blurb.
        created_at: Set by the database on insert.
        updated_at: Set by the database on insert and update.
    """

    username: str
    email: str
    bio: str = ""
    id: int | None = None
    created_at: datetime | None = field(default=None, compare=False)
    updated_at: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Authenticated:
    """Request carries a valid bearer token for ``user``."""

    user: User


@dataclass(frozen=True)
class Anonymous:
    """Request carries no credentials."""


ANONYMOUS = Anonymous()

Identity = Authenticated | Anonymous
