"""Application configuration loaded from environment variables.

Settings for database, API, password hashing, and bearer-token authentication.
Uses pydantic-settings for validation and .env file support.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "workout_dev_password"  # nosec B105

# bcrypt accepts log2 rounds in this range
_MIN_BCRYPT_ROUNDS = 4
_MAX_BCRYPT_ROUNDS = 31


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "workout_tracker"
    database_user: str = "workout_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD
    # Full async URL (e.g. "sqlite+aiosqlite:///./workouts.db"); wins over the
    # host/port/name parts when set.
    database_url_override: str = ""
    # Upper bound, in seconds, for a single storage operation (transaction)
    database_operation_timeout: float = 30.0

    # API
    # 0.0.0.0 binds to all network interfaces (required for Docker containers)
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8080

    # CORS (Security)
    # Bearer tokens travel in the Authorization header, not cookies, but a
    # wildcard origin is still refused.
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Authentication
    bcrypt_rounds: int = 12
    auth_token_ttl_hours: int = 24

    # Rate Limiting (Security)
    # Applies to the unauthenticated credential endpoints (register, login)
    rate_limit_auth: str = "5/minute"
    rate_limit_enabled: bool = True  # Disable for testing

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def database_url_sync(self) -> str:
        """Sync database URL for Alembic."""
        if self.database_url_override:
            return self.database_url_override.replace("+aiosqlite", "").replace(
                "+asyncpg", ""
            )
        return (
            f"postgresql://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate security requirements.

        Checks:
        - bcrypt rounds must be within the range bcrypt accepts
        - Token TTL must be positive
        - CORS must not use wildcard origin
        - Database password must not be the default in production
        """
        if not _MIN_BCRYPT_ROUNDS <= self.bcrypt_rounds <= _MAX_BCRYPT_ROUNDS:
            msg = (
                f"BCRYPT_ROUNDS must be between {_MIN_BCRYPT_ROUNDS} and "
                f"{_MAX_BCRYPT_ROUNDS}. Got: {self.bcrypt_rounds}"
            )
            raise ValueError(msg)

        if self.auth_token_ttl_hours <= 0:
            msg = (
                "AUTH_TOKEN_TTL_HOURS must be positive. "
                f"Got: {self.auth_token_ttl_hours}"
            )
            raise ValueError(msg)

        if "*" in self.allowed_origins:
            msg = "ALLOWED_ORIGINS must not contain '*' (wildcard)."
            raise ValueError(msg)

        if (
            self.environment == "production"
            and not self.database_url_override
            and self.database_password == _INSECURE_DEFAULT_PASSWORD
        ):
            msg = (
                "Cannot use default database password in production. "
                "Set DATABASE_PASSWORD environment variable to a secure value."
            )
            raise ValueError(msg)

        return self


settings = Settings()
