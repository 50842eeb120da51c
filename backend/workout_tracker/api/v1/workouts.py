"""Workout CRUD endpoints.

All endpoints require an authenticated user. A workout that belongs to
another user answers 404, exactly like one that does not exist.

PUT merges the sent fields onto the stored workout (see
UpdateWorkoutRequest) and hands the merged aggregate to the store, which
writes it as a full replace.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Path, Response

from workout_tracker.api.deps import CurrentUser, WorkoutStoreDep
from workout_tracker.core.errors import NotFoundError
from workout_tracker.core.responses import DataResponse
from workout_tracker.domain import User, Workout
from workout_tracker.repositories.base import WorkoutStore
from workout_tracker.schemas.workout import (
    MAX_DB_INT,
    CreateWorkoutRequest,
    UpdateWorkoutRequest,
    WorkoutRead,
)

logger = structlog.get_logger()

router = APIRouter()

WorkoutId = Annotated[int, Path(gt=0, le=MAX_DB_INT, description="Workout id")]


def _ensure_owner(workout_id: int, owner_id: int | None, user: User) -> None:
    if owner_id != user.id:
        raise NotFoundError("Workout", str(workout_id))


async def _get_owned_workout(
    store: WorkoutStore, workout_id: int, user: User
) -> Workout:
    workout = await store.get_workout_by_id(workout_id)
    _ensure_owner(workout_id, workout.user_id, user)
    return workout


@router.post("", status_code=201)
async def create_workout(
    body: CreateWorkoutRequest,
    user: CurrentUser,
    store: WorkoutStoreDep,
) -> DataResponse[WorkoutRead]:
    """Create a workout with its entries in one transaction."""
    workout = await store.create_workout(body.to_domain(user.id))
    logger.info(
        "Workout created",
        workout_id=workout.id,
        user_id=user.id,
        entries=len(workout.entries),
    )
    return DataResponse(data=WorkoutRead.model_validate(workout))


@router.get("/{workout_id}")
async def get_workout(
    workout_id: WorkoutId,
    user: CurrentUser,
    store: WorkoutStoreDep,
) -> DataResponse[WorkoutRead]:
    """Fetch a workout with entries ordered by order_index."""
    workout = await _get_owned_workout(store, workout_id, user)
    return DataResponse(data=WorkoutRead.model_validate(workout))


@router.put("/{workout_id}")
async def update_workout(
    workout_id: WorkoutId,
    body: UpdateWorkoutRequest,
    user: CurrentUser,
    store: WorkoutStoreDep,
) -> DataResponse[WorkoutRead]:
    """Update the fields present in the body.

    Omitted fields keep their stored values. A present ``entries`` list
    replaces every stored entry.
    """
    existing = await _get_owned_workout(store, workout_id, user)
    updated = await store.update_workout(
        body.apply_to(existing),
        replace_entries=body.replaces_entries,
    )
    return DataResponse(data=WorkoutRead.model_validate(updated))


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: WorkoutId,
    user: CurrentUser,
    store: WorkoutStoreDep,
) -> Response:
    """Delete a workout and (by cascade) its entries."""
    owner_id = await store.get_workout_owner(workout_id)
    _ensure_owner(workout_id, owner_id, user)
    await store.delete_workout(workout_id)
    logger.info("Workout deleted", workout_id=workout_id, user_id=user.id)
    return Response(status_code=204)
