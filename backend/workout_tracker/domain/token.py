"""Bearer token issued to a user."""

from dataclasses import dataclass, field
from datetime import datetime

# Scope for tokens issued by the username/password login
SCOPE_AUTHENTICATION = "authentication"


@dataclass
class Token:
    """An opaque capability to act as ``user_id`` within ``scope``.

    Attributes:
        plaintext: The secret handed to the client. Populated only on the
            token returned from creation; never persisted.
        hash: SHA-256 hex digest of the plaintext (the stored lookup key).
        user_id: Owning user.
        expiry: Token is valid strictly before this instant.
        scope: Purpose the token may be used for.
    """

    hash: str
    user_id: int
    expiry: datetime
    scope: str
    plaintext: str = field(default="", repr=False)
