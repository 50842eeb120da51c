"""Workout aggregate: a workout and its ordered exercise entries."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class WorkoutEntry:
    """One exercise line inside a workout.

    Optional numeric fields use None for "not recorded"; 0 is a real value.

    Attributes:
        exercise_name: Exercise performed (e.g., "Squat").
        sets: Number of sets.
        reps: Repetitions per set, if recorded.
        duration_seconds: Time-based effort, if recorded.
        weight: Load used, if recorded.
        notes: Free text.
        order_index: Position within the workout; entries are read back
            sorted by this value, not by insertion order.
        id: Set by the database on insert.
        workout_id: Parent workout, set when the aggregate is persisted.
        created_at: Set by the database on insert.
    """

    exercise_name: str
    sets: int
    order_index: int
    reps: int | None = None
    duration_seconds: int | None = None
    weight: float | None = None
    notes: str = ""
    id: int | None = None
    workout_id: int | None = None
    created_at: datetime | None = field(default=None, compare=False)


@dataclass
class Workout:
    """Aggregate root owning an ordered list of entries.

    Attributes:
        title: Workout name.
        description: Free text.
        duration_minutes: Total duration.
        calories_burned: Estimated energy expenditure.
        entries: Entries ordered by order_index. Empty list, never None.
        user_id: Owner, if the workout was created by an authenticated user.
        id: Set by the database on insert.
        created_at: Set by the database on insert.
        updated_at: Set by the database on insert and update.
    """

    title: str
    description: str = ""
    duration_minutes: int = 0
    calories_burned: int = 0
    entries: list[WorkoutEntry] = field(default_factory=list)
    user_id: int | None = None
    id: int | None = None
    created_at: datetime | None = field(default=None, compare=False)
    updated_at: datetime | None = field(default=None, compare=False)
