"""Password hashing and bearer-token primitives.

Pipeline:
- hash_password / password_matches: bcrypt (adaptive, salted) for passwords
- generate_token_plaintext / hash_token: opaque bearer tokens and their
  SHA-256 lookup digest
- DUMMY_HASH: Timing-safe constant for user enumeration defense

Passwords are low-entropy and need a slow hash. Tokens are 256-bit random
secrets looked up by digest on every request, so a fast deterministic
digest is enough and lets the lookup be an indexed equality match.
"""

import base64
import hashlib
import secrets

import bcrypt

from workout_tracker.core.config import settings
from workout_tracker.core.errors import HashingError

# Random bytes behind each bearer token (256 bits)
TOKEN_ENTROPY_BYTES = 32

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

# Pre-computed bcrypt hash for timing-safe comparison on user-not-found.
# Security: prevents user enumeration via response time differences.
# Pre-generated to avoid ~300ms bcrypt computation on every app startup.
DUMMY_HASH = b"$2b$12$ZP2PVB8yI35X.mkRqcUPUuSzJA1CNRt4dZ7X3cyrfJu.2S3w.Qen2"


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Hash a plaintext password with bcrypt.

    Args:
        password: Plaintext password.
        rounds: bcrypt cost factor. Defaults to settings.bcrypt_rounds (12).

    Returns:
        bcrypt hash string (salt and cost embedded).

    Raises:
        HashingError: If bcrypt refuses the input (e.g., over 72 bytes).
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()
    except ValueError as exc:
        raise HashingError("Password could not be hashed") from exc


def password_matches(password: str, password_hash: str | bytes) -> bool:
    """Check a candidate password against a stored bcrypt hash.

    A mismatch returns False. It is not an error. A candidate longer than
    BCRYPT_MAX_PASSWORD_BYTES can never match, since no stored password is
    that long, but it still pays for a full bcrypt check.

    Args:
        password: Candidate plaintext password.
        password_hash: Stored bcrypt hash.

    Returns:
        True if the password matches, False otherwise.

    Raises:
        HashingError: If the stored hash is malformed or verification
            fails for any reason other than a mismatch.
    """
    if isinstance(password_hash, str):
        password_hash = password_hash.encode()
    candidate = password.encode()
    try:
        matched = bcrypt.checkpw(
            candidate[:BCRYPT_MAX_PASSWORD_BYTES], password_hash
        )
    except ValueError as exc:
        raise HashingError("Stored password hash could not be verified") from exc
    return matched and len(candidate) <= BCRYPT_MAX_PASSWORD_BYTES


def burn_dummy_check(password: str) -> None:
    """Spend the same bcrypt time as a real check when no user exists."""
    bcrypt.checkpw(password.encode()[:BCRYPT_MAX_PASSWORD_BYTES], DUMMY_HASH)


def generate_token_plaintext() -> str:
    """Generate a new opaque bearer token.

    Returns:
        Base32 text (no padding) of TOKEN_ENTROPY_BYTES random bytes.
    """
    raw = secrets.token_bytes(TOKEN_ENTROPY_BYTES)
    return base64.b32encode(raw).decode().rstrip("=")


def hash_token(plaintext: str) -> str:
    """Derive the lookup digest stored for a token.

    Args:
        plaintext: Token as presented by the client.

    Returns:
        SHA-256 hex digest of the plaintext.
    """
    return hashlib.sha256(plaintext.encode()).hexdigest()
