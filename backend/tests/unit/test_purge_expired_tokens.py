"""Tests for the expired-token purge script."""

from datetime import UTC, datetime, timedelta

from scripts.purge_expired_tokens import run_purge
from tests.conftest import count_rows
from workout_tracker import models
from workout_tracker.domain import SCOPE_AUTHENTICATION, Token


async def test_run_purge_deletes_only_expired(session_factory, token_store, test_user):
    """Expired rows are removed; live rows stay."""
    now = datetime.now(UTC)
    for digest, expiry in (
        ("e" * 64, now - timedelta(hours=1)),
        ("l" * 64, now + timedelta(hours=1)),
    ):
        await token_store.insert(
            Token(
                hash=digest,
                user_id=test_user.id,
                expiry=expiry,
                scope=SCOPE_AUTHENTICATION,
            )
        )

    assert await run_purge(session_factory) == 1
    assert await count_rows(session_factory, models.Token) == 1
