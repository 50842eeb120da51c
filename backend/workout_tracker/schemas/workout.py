"""Workout request/response schemas.

Two-layer update contract:
- UpdateWorkoutRequest merges only the fields the client sent onto the
  stored workout (PATCH-like, even though the route is PUT)
- WorkoutStore.update_workout then writes the merged result as a full
  replace
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from workout_tracker.domain import Workout, WorkoutEntry

# Largest value an INTEGER column holds on every supported backend
MAX_DB_INT = 2_147_483_647


class WorkoutEntryRequest(BaseModel):
    """One entry in a create/update request.

    ``order_index`` defaults to the entry's position in the submitted list.
    Optional numbers stay None when omitted; None and 0 mean different
    things.
    """

    model_config = ConfigDict(extra="forbid")

    exercise_name: str = Field(min_length=1, max_length=255)
    sets: int = Field(ge=0, le=MAX_DB_INT)
    reps: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    duration_seconds: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    weight: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    notes: str = ""
    order_index: int | None = Field(default=None, ge=0, le=MAX_DB_INT)

    def to_domain(self, position: int) -> WorkoutEntry:
        return WorkoutEntry(
            exercise_name=self.exercise_name,
            sets=self.sets,
            reps=self.reps,
            duration_seconds=self.duration_seconds,
            weight=self.weight,
            notes=self.notes,
            order_index=(
                self.order_index if self.order_index is not None else position
            ),
        )


def _entries_to_domain(entries: list[WorkoutEntryRequest]) -> list[WorkoutEntry]:
    return [entry.to_domain(position) for position, entry in enumerate(entries)]


class CreateWorkoutRequest(BaseModel):
    """Request body for POST /workouts."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    duration_minutes: int = Field(default=0, ge=0, le=MAX_DB_INT)
    calories_burned: int = Field(default=0, ge=0, le=MAX_DB_INT)
    entries: list[WorkoutEntryRequest] = Field(default_factory=list)

    def to_domain(self, user_id: int | None) -> Workout:
        return Workout(
            user_id=user_id,
            title=self.title,
            description=self.description,
            duration_minutes=self.duration_minutes,
            calories_burned=self.calories_burned,
            entries=_entries_to_domain(self.entries),
        )


class UpdateWorkoutRequest(BaseModel):
    """Request body for PUT /workouts/{id}.

    Every field is optional. Omitted (or null) fields keep their stored
    value. ``entries``, when present, replaces the whole entry list; an
    empty list clears it.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    calories_burned: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    entries: list[WorkoutEntryRequest] | None = None

    @property
    def replaces_entries(self) -> bool:
        """Whether the client sent a new entry list."""
        return self.entries is not None

    def apply_to(self, existing: Workout) -> Workout:
        """Merge the sent fields onto a stored workout.

        Args:
            existing: Workout as currently stored.

        Returns:
            New Workout holding the full post-update state.
        """
        return Workout(
            id=existing.id,
            user_id=existing.user_id,
            title=self.title if self.title is not None else existing.title,
            description=(
                self.description
                if self.description is not None
                else existing.description
            ),
            duration_minutes=(
                self.duration_minutes
                if self.duration_minutes is not None
                else existing.duration_minutes
            ),
            calories_burned=(
                self.calories_burned
                if self.calories_burned is not None
                else existing.calories_burned
            ),
            entries=(
                _entries_to_domain(self.entries)
                if self.entries is not None
                else list(existing.entries)
            ),
            created_at=existing.created_at,
            updated_at=existing.updated_at,
        )


class WorkoutEntryRead(BaseModel):
    """Entry as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    exercise_name: str
    sets: int
    reps: int | None = None
    duration_seconds: int | None = None
    weight: float | None = None
    notes: str
    order_index: int
    created_at: datetime | None = None


class WorkoutRead(BaseModel):
    """Workout as returned by the API with its ordered entries.

    Attributes:
        id: Workout id.
        user_id: Owner.
        title: Workout name.
        description: Free text.
        duration_minutes: Total duration.
        calories_burned: Estimated calories.
        entries: Ordered entries (empty list when there are none).
        created_at: Creation time.
        updated_at: Last change.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None = None
    title: str
    description: str
    duration_minutes: int
    calories_burned: int
    entries: list[WorkoutEntryRead]
    created_at: datetime | None = None
    updated_at: datetime | None = None
