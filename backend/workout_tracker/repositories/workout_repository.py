"""SQLAlchemy adapter for WorkoutStore.

The workout and its entries are written as one unit: the parent insert and
every entry insert share a transaction, so a failure on any entry leaves no
trace of the workout. Entries are read back in a second query ordered by
order_index.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_tracker import models
from workout_tracker.core.errors import NotFoundError
from workout_tracker.domain import Workout, WorkoutEntry
from workout_tracker.repositories.base import WorkoutStore
from workout_tracker.repositories.sqlalchemy_store import SQLAlchemyStore

_RESOURCE = "Workout"


def _entry_to_domain(row: models.WorkoutEntry) -> WorkoutEntry:
    return WorkoutEntry(
        id=row.id,
        workout_id=row.workout_id,
        exercise_name=row.exercise_name,
        sets=row.sets,
        reps=row.reps,
        duration_seconds=row.duration_seconds,
        weight=row.weight,
        notes=row.notes,
        order_index=row.order_index,
        created_at=row.created_at,
    )


def _workout_to_domain(
    row: models.Workout, entries: list[models.WorkoutEntry]
) -> Workout:
    return Workout(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        duration_minutes=row.duration_minutes,
        calories_burned=row.calories_burned,
        created_at=row.created_at,
        updated_at=row.updated_at,
        entries=[_entry_to_domain(entry) for entry in entries],
    )


async def _insert_entries(
    db: AsyncSession, workout_id: int, entries: list[WorkoutEntry]
) -> list[models.WorkoutEntry]:
    """Insert entries one at a time, in the given order.

    Each entry is flushed before the next so a failure stops at the
    offending entry; the enclosing transaction discards the rest.
    """
    rows: list[models.WorkoutEntry] = []
    for entry in entries:
        row = models.WorkoutEntry(
            workout_id=workout_id,
            exercise_name=entry.exercise_name,
            sets=entry.sets,
            reps=entry.reps,
            duration_seconds=entry.duration_seconds,
            weight=entry.weight,
            notes=entry.notes,
            order_index=entry.order_index,
        )
        db.add(row)
        await db.flush()
        rows.append(row)

    for row in rows:
        await db.refresh(row)
    return rows


async def _select_entries(
    db: AsyncSession, workout_id: int
) -> list[models.WorkoutEntry]:
    stmt = (
        select(models.WorkoutEntry)
        .where(models.WorkoutEntry.workout_id == workout_id)
        .order_by(models.WorkoutEntry.order_index, models.WorkoutEntry.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


class WorkoutRepository(SQLAlchemyStore, WorkoutStore):
    """WorkoutStore backed by the workouts and workout_entries tables."""

    async def create_workout(self, workout: Workout) -> Workout:
        """Insert a workout and all of its entries atomically.

        Args:
            workout: Aggregate to create (ids and timestamps ignored).

        Returns:
            New Workout with generated ids and timestamps. Entries keep the
            order they were given in.

        Raises:
            PersistenceError: If any insert fails. Nothing is committed.
        """
        async with self._transaction("create_workout") as db:
            row = models.Workout(
                user_id=workout.user_id,
                title=workout.title,
                description=workout.description,
                duration_minutes=workout.duration_minutes,
                calories_burned=workout.calories_burned,
            )
            db.add(row)
            await db.flush()
            await db.refresh(row)

            entry_rows = await _insert_entries(db, row.id, workout.entries)
            return _workout_to_domain(row, entry_rows)

    async def get_workout_by_id(self, workout_id: int) -> Workout:
        """Fetch a workout and its entries sorted by order_index.

        Args:
            workout_id: Workout primary key.

        Returns:
            Workout; ``entries`` is an empty list when it has none.

        Raises:
            NotFoundError: If the workout does not exist.
        """
        async with self._transaction("get_workout_by_id") as db:
            row = await db.get(models.Workout, workout_id)
            if row is None:
                raise NotFoundError(_RESOURCE, str(workout_id))

            entry_rows = await _select_entries(db, workout_id)
            return _workout_to_domain(row, entry_rows)

    async def update_workout(
        self, workout: Workout, *, replace_entries: bool = True
    ) -> Workout:
        """Overwrite workout fields and, optionally, the whole entry list.

        This is a full replace: every mutable field of ``workout`` is
        written. Deciding which fields to carry over from the stored
        workout is the caller's job.

        Args:
            workout: Full new state; ``workout.id`` selects the row.
            replace_entries: Delete stored entries and insert
                ``workout.entries`` in their place. An empty
                ``workout.entries`` deletes every entry; an explicit
                ``entries: []`` in an update is meant to clear the list.

        Returns:
            Updated Workout with entries sorted by order_index.

        Raises:
            NotFoundError: If the workout does not exist.
        """
        if workout.id is None:
            raise NotFoundError(_RESOURCE)

        async with self._transaction("update_workout") as db:
            row = await db.get(models.Workout, workout.id)
            if row is None:
                raise NotFoundError(_RESOURCE, str(workout.id))

            row.title = workout.title
            row.description = workout.description
            row.duration_minutes = workout.duration_minutes
            row.calories_burned = workout.calories_burned
            row.updated_at = func.now()

            if replace_entries:
                await db.execute(
                    delete(models.WorkoutEntry).where(
                        models.WorkoutEntry.workout_id == row.id
                    )
                )
                await _insert_entries(db, row.id, workout.entries)

            await db.flush()
            await db.refresh(row)
            entry_rows = await _select_entries(db, row.id)
            return _workout_to_domain(row, entry_rows)

    async def delete_workout(self, workout_id: int) -> None:
        """Delete a workout row; the schema cascades to its entries.

        Raises:
            NotFoundError: If no workout was deleted.
        """
        async with self._transaction("delete_workout") as db:
            stmt = delete(models.Workout).where(models.Workout.id == workout_id)
            result = await db.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError(_RESOURCE, str(workout_id))

    async def get_workout_owner(self, workout_id: int) -> int | None:
        """Return the user id that owns a workout (None if unowned).

        Raises:
            NotFoundError: If the workout does not exist.
        """
        async with self._transaction("get_workout_owner") as db:
            stmt = select(models.Workout.id, models.Workout.user_id).where(
                models.Workout.id == workout_id
            )
            result = await db.execute(stmt)
            found = result.one_or_none()
            if found is None:
                raise NotFoundError(_RESOURCE, str(workout_id))
            return found.user_id
