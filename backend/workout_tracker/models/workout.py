"""Workout and WorkoutEntry models.

A workout exclusively owns its entries. workout_entries.workout_id carries
ON DELETE CASCADE, so deleting a workout row removes its entries without
any explicit child statement.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from workout_tracker.models.base import Base, TimestampMixin


class Workout(Base, TimestampMixin):
    """Workout aggregate root.

    Attributes:
        id: Integer primary key.
        user_id: FK to users (creator). NULL for workouts created outside
            an authenticated request.
        title: Workout name.
        description: Free text.
        duration_minutes: Total duration in minutes.
        calories_burned: Estimated calories.
    """

    __tablename__ = "workouts"
    __table_args__ = (
        CheckConstraint("duration_minutes >= 0", name="ck_workouts_duration"),
        CheckConstraint("calories_burned >= 0", name="ck_workouts_calories"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text(),
        nullable=False,
        default="",
        server_default="",
    )
    duration_minutes: Mapped[int] = mapped_column(
        nullable=False,
        default=0,
    )
    calories_burned: Mapped[int] = mapped_column(
        nullable=False,
        default=0,
    )


class WorkoutEntry(Base):
    """One ordered exercise line of a workout.

    Attributes:
        id: Integer primary key.
        workout_id: FK to workouts (CASCADE).
        exercise_name: Exercise performed.
        sets: Number of sets.
        reps: Repetitions per set. NULL = not recorded.
        duration_seconds: Time-based effort. NULL = not recorded.
        weight: Load used. NULL = not recorded.
        notes: Free text.
        order_index: Explicit position within the workout.
        created_at: Insert timestamp.
    """

    __tablename__ = "workout_entries"
    __table_args__ = (
        CheckConstraint("sets >= 0", name="ck_workout_entries_sets"),
        CheckConstraint("reps IS NULL OR reps >= 0", name="ck_workout_entries_reps"),
        CheckConstraint(
            "duration_seconds IS NULL OR duration_seconds >= 0",
            name="ck_workout_entries_duration",
        ),
        CheckConstraint(
            "weight IS NULL OR weight >= 0", name="ck_workout_entries_weight"
        ),
        CheckConstraint("order_index >= 0", name="ck_workout_entries_order_index"),
        Index("ix_workout_entries_workout_id_order", "workout_id", "order_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
    )
    exercise_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    sets: Mapped[int] = mapped_column(nullable=False)
    reps: Mapped[int | None] = mapped_column(nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(nullable=True)
    weight: Mapped[float | None] = mapped_column(Float(), nullable=True)
    notes: Mapped[str] = mapped_column(
        Text(),
        nullable=False,
        default="",
        server_default="",
    )
    order_index: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
