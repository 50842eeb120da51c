import os

# Test-only settings, applied before the application reads its config.
# Cheap bcrypt keeps the suite fast; the production default (12) is
# asserted in test_core_config.py.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from workout_tracker.core.auth import hash_password  # noqa: E402
from workout_tracker.core.database import (  # noqa: E402
    enable_sqlite_foreign_keys,
    get_session_factory,
)
from workout_tracker.domain import (  # noqa: E402
    SCOPE_AUTHENTICATION,
    User,
    Workout,
    WorkoutEntry,
)
from workout_tracker.models import Base  # noqa: E402
from workout_tracker.repositories.token_repository import (  # noqa: E402
    TokenRepository,
)
from workout_tracker.repositories.user_repository import UserRepository  # noqa: E402
from workout_tracker.repositories.workout_repository import (  # noqa: E402
    WorkoutRepository,
)
from workout_tracker.services.token_service import TokenService  # noqa: E402

# In-memory SQLite by default; point at PostgreSQL with e.g.
# TEST_DATABASE_URL=postgresql+asyncpg://user:pw@localhost/workout_tracker_test
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

TEST_USERNAME = "alice"
TEST_PASSWORD = "secret123"  # nosec B105


class FakeClock:
    """Controllable clock for token expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def make_workout(
    *,
    title: str = "Leg Day",
    user_id: int | None = None,
    entries: list[WorkoutEntry] | None = None,
) -> Workout:
    """Build an unsaved workout with sensible defaults."""
    return Workout(
        title=title,
        description="Lower body",
        duration_minutes=60,
        calories_burned=500,
        user_id=user_id,
        entries=entries
        if entries is not None
        else [WorkoutEntry(exercise_name="Squat", sets=3, reps=10, order_index=0)],
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine with a fresh schema."""
    engine_kwargs: dict = {"echo": False}
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so the in-memory database survives across
        # sessions.
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(TEST_DATABASE_URL, **engine_kwargs)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def count_rows(
    session_factory: async_sessionmaker[AsyncSession], model: type[Base]
) -> int:
    """Count rows of a model in a short-lived session of its own."""
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model)) or 0


@pytest.fixture
def user_store(session_factory) -> UserRepository:
    return UserRepository(session_factory)


@pytest.fixture
def token_store(session_factory) -> TokenRepository:
    return TokenRepository(session_factory)


@pytest.fixture
def workout_store(session_factory) -> WorkoutRepository:
    return WorkoutRepository(session_factory)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(token_store, user_store, clock) -> TokenService:
    """TokenService on the test stores with a controllable clock."""
    return TokenService(token_store, user_store, clock=clock)


@pytest_asyncio.fixture
async def test_user(user_store) -> User:
    """Persisted user alice / secret123."""
    return await user_store.create_user(
        User(username=TEST_USERNAME, email="alice@example.com", bio="Lifter"),
        hash_password(TEST_PASSWORD),
    )


@pytest_asyncio.fixture
async def other_user(user_store) -> User:
    """A second persisted user, for ownership tests."""
    return await user_store.create_user(
        User(username="bob", email="bob@example.com"),
        hash_password("hunter22"),
    )


# =============================================================================
# API Test Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def unauthenticated_client(
    session_factory,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with no Authorization header.

    Overrides the session factory dependency so every store the app builds
    talks to the test database.
    """
    from workout_tracker.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    session_factory,
    test_user: User,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client authenticated as test_user via a bearer token."""
    from workout_tracker.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory

    service = TokenService(
        TokenRepository(session_factory), UserRepository(session_factory)
    )
    assert test_user.id is not None
    token = await service.create_token(
        test_user.id, timedelta(hours=24), SCOPE_AUTHENTICATION
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {token.plaintext}"},
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def bearer() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a plaintext token."""

    def _bearer(plaintext: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {plaintext}"}

    return _bearer
