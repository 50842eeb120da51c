"""Pydantic request/response schemas for API endpoints."""

from workout_tracker.schemas.token import (
    AuthenticationTokenRead,
    CreateAuthenticationTokenRequest,
)
from workout_tracker.schemas.user import RegisterUserRequest, UserRead
from workout_tracker.schemas.workout import (
    CreateWorkoutRequest,
    UpdateWorkoutRequest,
    WorkoutEntryRead,
    WorkoutEntryRequest,
    WorkoutRead,
)

__all__ = [
    # Tokens
    "AuthenticationTokenRead",
    "CreateAuthenticationTokenRequest",
    # Users
    "RegisterUserRequest",
    "UserRead",
    # Workouts
    "CreateWorkoutRequest",
    "UpdateWorkoutRequest",
    "WorkoutEntryRead",
    "WorkoutEntryRequest",
    "WorkoutRead",
]
