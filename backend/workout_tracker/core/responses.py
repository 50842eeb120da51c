"""Response envelope models.

Consistent response format for all API endpoints.

WHY RESPONSE ENVELOPES:
- Consistent structure across all endpoints
- Easy to distinguish success from error responses
- Type-safe response building in endpoints
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Standard response envelope for single resources.

    All success responses use {"data": ...} envelope.

    Usage:
        @router.get("/workouts/{workout_id}")
        async def get_workout(workout_id: int) -> DataResponse[WorkoutRead]:
            workout = await store.get_workout_by_id(workout_id)
            return DataResponse(data=WorkoutRead.model_validate(workout))
    """

    data: T


class ErrorDetail(BaseModel):
    """Error body inside the error envelope.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable message, safe to show to clients.
        details: Optional field-level details.
    """

    code: str
    message: str
    details: list[dict] | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope: {"error": {...}}."""

    error: ErrorDetail
