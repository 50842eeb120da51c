"""Tests for /api/v1/workouts endpoints.

Ownership: a workout that belongs to someone else answers 404, the same
as one that does not exist.
"""

from httpx import AsyncClient

from tests.conftest import make_workout

_URL = "/api/v1/workouts"


def _create_payload(**overrides) -> dict:
    payload = {
        "title": "Leg Day",
        "description": "Lower body",
        "duration_minutes": 60,
        "calories_burned": 500,
        "entries": [
            {"exercise_name": "Squat", "sets": 3, "reps": 10, "weight": 100},
            {"exercise_name": "Plank", "sets": 3, "duration_seconds": 60},
        ],
    }
    payload.update(overrides)
    return payload


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post(_URL, json=_create_payload(**overrides))
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateWorkout:
    """Test POST /api/v1/workouts."""

    async def test_creates_workout_with_entries(self, client: AsyncClient, test_user):
        """201 with ids, owner, and entries in order."""
        data = await _create(client)

        assert data["id"] > 0
        assert data["user_id"] == test_user.id
        assert data["title"] == "Leg Day"
        assert [e["exercise_name"] for e in data["entries"]] == ["Squat", "Plank"]
        assert [e["order_index"] for e in data["entries"]] == [0, 1]
        assert all(e["workout_id"] == data["id"] for e in data["entries"])

    async def test_omitted_numbers_are_null(self, client: AsyncClient):
        """Unrecorded reps/weight come back as null, not 0."""
        data = await _create(client)
        plank = data["entries"][1]
        assert plank["reps"] is None
        assert plank["weight"] is None
        assert plank["duration_seconds"] == 60

    async def test_without_entries(self, client: AsyncClient):
        """A workout may have no entries."""
        data = await _create(client, entries=[])
        assert data["entries"] == []

    async def test_negative_sets_is_400(self, client: AsyncClient):
        """Invalid entries are rejected before anything is stored."""
        response = await client.post(
            _URL,
            json=_create_payload(entries=[{"exercise_name": "Squat", "sets": -1}]),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_sets_beyond_integer_column_is_400(self, client: AsyncClient):
        """Huge counts are a validation error, not a database failure."""
        response = await client.post(
            _URL,
            json=_create_payload(entries=[{"exercise_name": "Squat", "sets": 2**70}]),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert response.json()["error"]["details"][0]["loc"][-1] == "sets"

    async def test_missing_title_is_400(self, client: AsyncClient):
        """Title is required."""
        payload = _create_payload()
        del payload["title"]
        response = await client.post(_URL, json=payload)
        assert response.status_code == 400

    async def test_anonymous_is_401(self, unauthenticated_client: AsyncClient):
        """Creating a workout requires authentication."""
        response = await unauthenticated_client.post(_URL, json=_create_payload())
        assert response.status_code == 401


class TestGetWorkout:
    """Test GET /api/v1/workouts/{id}."""

    async def test_returns_entries_by_order_index(self, client: AsyncClient):
        """Entries are sorted by order_index regardless of submission order."""
        created = await _create(
            client,
            entries=[
                {"exercise_name": "C", "sets": 1, "order_index": 3},
                {"exercise_name": "A", "sets": 1, "order_index": 1},
                {"exercise_name": "B", "sets": 1, "order_index": 2},
            ],
        )
        response = await client.get(f"{_URL}/{created['id']}")

        assert response.status_code == 200
        entries = response.json()["data"]["entries"]
        assert [e["exercise_name"] for e in entries] == ["A", "B", "C"]

    async def test_missing_is_404(self, client: AsyncClient):
        """Unknown id is NOT_FOUND."""
        response = await client.get(f"{_URL}/999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_other_users_workout_is_404(
        self, client: AsyncClient, workout_store, other_user
    ):
        """Someone else's workout looks like a missing one."""
        theirs = await workout_store.create_workout(make_workout(user_id=other_user.id))
        response = await client.get(f"{_URL}/{theirs.id}")
        assert response.status_code == 404

    async def test_zero_id_is_400(self, client: AsyncClient):
        """Ids must be positive."""
        response = await client.get(f"{_URL}/0")
        assert response.status_code == 400

    async def test_non_numeric_id_is_400(self, client: AsyncClient):
        """Ids must be integers."""
        response = await client.get(f"{_URL}/abc")
        assert response.status_code == 400

    async def test_id_beyond_integer_column_is_400(self, client: AsyncClient):
        """Ids larger than any stored row are rejected up front."""
        response = await client.get(f"{_URL}/{2**70}")
        assert response.status_code == 400


class TestUpdateWorkout:
    """Test PUT /api/v1/workouts/{id}."""

    async def test_title_only_keeps_other_fields(self, client: AsyncClient):
        """Omitted fields and entries are preserved."""
        created = await _create(client)
        response = await client.put(
            f"{_URL}/{created['id']}", json={"title": "Heavy Leg Day"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Heavy Leg Day"
        assert data["calories_burned"] == 500
        assert data["duration_minutes"] == 60
        assert [e["id"] for e in data["entries"]] == [
            e["id"] for e in created["entries"]
        ]

    async def test_entries_are_replaced(self, client: AsyncClient):
        """A sent entries list replaces all stored entries."""
        created = await _create(client)
        response = await client.put(
            f"{_URL}/{created['id']}",
            json={"entries": [{"exercise_name": "Deadlift", "sets": 5, "reps": 5}]},
        )

        data = response.json()["data"]
        assert [e["exercise_name"] for e in data["entries"]] == ["Deadlift"]
        assert data["title"] == "Leg Day"

    async def test_empty_entries_clears(self, client: AsyncClient):
        """An explicit empty list removes every entry."""
        created = await _create(client)
        response = await client.put(f"{_URL}/{created['id']}", json={"entries": []})
        assert response.json()["data"]["entries"] == []

    async def test_other_users_workout_is_404(
        self, client: AsyncClient, workout_store, other_user
    ):
        """Updating someone else's workout is NOT_FOUND and changes nothing."""
        theirs = await workout_store.create_workout(make_workout(user_id=other_user.id))
        response = await client.put(f"{_URL}/{theirs.id}", json={"title": "Mine now"})

        assert response.status_code == 404
        stored = await workout_store.get_workout_by_id(theirs.id)
        assert stored.title == "Leg Day"

    async def test_missing_is_404(self, client: AsyncClient):
        """Unknown id is NOT_FOUND."""
        response = await client.put(f"{_URL}/999", json={"title": "X"})
        assert response.status_code == 404

    async def test_negative_calories_is_400(self, client: AsyncClient):
        """Partial updates are still validated."""
        created = await _create(client)
        response = await client.put(
            f"{_URL}/{created['id']}", json={"calories_burned": -10}
        )
        assert response.status_code == 400

    async def test_calories_beyond_integer_column_is_400(self, client: AsyncClient):
        """An oversized total leaves the stored workout untouched."""
        created = await _create(client)
        response = await client.put(
            f"{_URL}/{created['id']}", json={"calories_burned": 2**40}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

        stored = await client.get(f"{_URL}/{created['id']}")
        assert stored.json()["data"]["calories_burned"] == created["calories_burned"]


class TestDeleteWorkout:
    """Test DELETE /api/v1/workouts/{id}."""

    async def test_deletes_and_then_404(self, client: AsyncClient):
        """204, then the workout is gone."""
        created = await _create(client)
        response = await client.delete(f"{_URL}/{created['id']}")
        assert response.status_code == 204

        again = await client.get(f"{_URL}/{created['id']}")
        assert again.status_code == 404

    async def test_second_delete_is_404(self, client: AsyncClient):
        """Deleting twice reports NOT_FOUND the second time."""
        created = await _create(client)
        await client.delete(f"{_URL}/{created['id']}")
        response = await client.delete(f"{_URL}/{created['id']}")
        assert response.status_code == 404

    async def test_other_users_workout_is_404(
        self, client: AsyncClient, workout_store, other_user
    ):
        """Someone else's workout survives the attempt."""
        theirs = await workout_store.create_workout(make_workout(user_id=other_user.id))
        response = await client.delete(f"{_URL}/{theirs.id}")

        assert response.status_code == 404
        assert (await workout_store.get_workout_by_id(theirs.id)).id == theirs.id


class TestEndToEnd:
    """Register, log in, and manage a workout over HTTP only."""

    async def test_full_flow(self, unauthenticated_client: AsyncClient, bearer):
        """alice registers, logs in, creates, reads, and logs out."""
        registered = await unauthenticated_client.post(
            "/api/v1/users",
            json={
                "username": "alice",
                "email": "alice@example.com",
                "password": "secret123",
            },
        )
        assert registered.status_code == 201

        login = await unauthenticated_client.post(
            "/api/v1/tokens/authentication",
            json={"username": "alice", "password": "secret123"},
        )
        assert login.status_code == 201
        headers = bearer(login.json()["data"]["auth_token"])

        created = await unauthenticated_client.post(
            _URL, json=_create_payload(), headers=headers
        )
        assert created.status_code == 201
        workout_id = created.json()["data"]["id"]

        fetched = await unauthenticated_client.get(
            f"{_URL}/{workout_id}", headers=headers
        )
        assert fetched.status_code == 200
        assert fetched.json()["data"]["user_id"] == registered.json()["data"]["id"]

        logout = await unauthenticated_client.delete(
            "/api/v1/tokens/authentication", headers=headers
        )
        assert logout.status_code == 204

        after = await unauthenticated_client.get(
            f"{_URL}/{workout_id}", headers=headers
        )
        assert after.status_code == 401


class TestHealth:
    """Test GET /health."""

    async def test_reports_available(self, unauthenticated_client: AsyncClient):
        response = await unauthenticated_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "available"}
