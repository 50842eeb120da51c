"""Tests for UserRepository."""

from datetime import UTC, datetime, timedelta

import pytest

from tests.conftest import TEST_USERNAME
from workout_tracker.core.auth import hash_token
from workout_tracker.core.errors import ConflictError, NotFoundError
from workout_tracker.domain import SCOPE_AUTHENTICATION, Token, User

_HASH = "$2b$04$abcdefghijklmnopqrstuu5/dpv1E5nUxvD2ZmBrmn4.3sLjJZxoG"


class TestCreateUser:
    """Test UserRepository.create_user()."""

    async def test_populates_generated_fields(self, user_store):
        """id and timestamps come back from the database."""
        user = await user_store.create_user(
            User(username="dana", email="dana@example.com", bio="hi"), _HASH
        )
        assert user.id is not None
        assert user.created_at is not None
        assert user.updated_at is not None
        assert (user.username, user.email, user.bio) == (
            "dana",
            "dana@example.com",
            "hi",
        )

    async def test_duplicate_username_conflicts(self, user_store, test_user):
        """A second user with the same username is USERNAME_TAKEN."""
        with pytest.raises(ConflictError) as exc_info:
            await user_store.create_user(
                User(username=TEST_USERNAME, email="x@example.com"), _HASH
            )
        assert exc_info.value.code == "USERNAME_TAKEN"


class TestGetUser:
    """Test get_user_by_username() and get_user_by_id()."""

    async def test_by_username_returns_user_and_hash(self, user_store, test_user):
        """Lookup by username includes the stored hash."""
        found = await user_store.get_user_by_username(TEST_USERNAME)
        assert found is not None
        user, password_hash = found
        assert user.id == test_user.id
        assert password_hash.startswith("$2b$")

    async def test_by_username_is_exact(self, user_store, test_user):
        """No case folding or prefix matching."""
        assert await user_store.get_user_by_username("ALICE") is None
        assert await user_store.get_user_by_username("ali") is None

    async def test_by_id(self, user_store, test_user):
        """Lookup by id."""
        user = await user_store.get_user_by_id(test_user.id)
        assert user is not None
        assert (user.id, user.username) == (test_user.id, test_user.username)

    async def test_missing_id_is_none(self, user_store):
        """Unknown id returns None."""
        assert await user_store.get_user_by_id(999) is None


class TestUpdateUser:
    """Test UserRepository.update_user()."""

    async def test_updates_profile_and_keeps_hash(self, user_store, test_user):
        """Without password_hash the stored hash is untouched."""
        _, before = await user_store.get_user_by_username(TEST_USERNAME)
        test_user.bio = "Runner now"
        updated = await user_store.update_user(test_user)
        assert updated.bio == "Runner now"

        _, after = await user_store.get_user_by_username(TEST_USERNAME)
        assert after == before

    async def test_replaces_hash_when_given(self, user_store, test_user):
        """A new hash is stored."""
        await user_store.update_user(test_user, password_hash=_HASH)
        _, stored = await user_store.get_user_by_username(TEST_USERNAME)
        assert stored == _HASH

    async def test_rename_to_taken_username_conflicts(
        self, user_store, test_user, other_user
    ):
        """Renaming onto an existing username fails."""
        other_user.username = TEST_USERNAME
        with pytest.raises(ConflictError):
            await user_store.update_user(other_user)

    async def test_missing_user_not_found(self, user_store):
        """Updating an unknown id is NotFoundError."""
        with pytest.raises(NotFoundError):
            await user_store.update_user(
                User(id=999, username="ghost", email="g@example.com")
            )


class TestGetUserForToken:
    """Test UserRepository.get_user_for_token()."""

    async def test_matches_scope_and_expiry(self, user_store, token_store, test_user):
        """Digest, scope, and a future expiry are all required."""
        now = datetime.now(UTC)
        await token_store.insert(
            Token(
                hash=hash_token("PLAIN"),
                user_id=test_user.id,
                expiry=now + timedelta(minutes=5),
                scope=SCOPE_AUTHENTICATION,
            )
        )

        user = await user_store.get_user_for_token(
            SCOPE_AUTHENTICATION, hash_token("PLAIN"), now
        )
        assert user is not None
        assert user.id == test_user.id

        assert (
            await user_store.get_user_for_token(
                "password-reset", hash_token("PLAIN"), now
            )
            is None
        )
        assert (
            await user_store.get_user_for_token(
                SCOPE_AUTHENTICATION,
                hash_token("PLAIN"),
                now + timedelta(minutes=5),
            )
            is None
        )
