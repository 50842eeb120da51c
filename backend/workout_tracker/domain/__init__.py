"""Domain types shared by services, stores, and the API layer.

Plain dataclasses with no persistence dependencies:
- user.py: User, Identity (Authenticated | Anonymous)
- token.py: Token, SCOPE_AUTHENTICATION
- workout.py: Workout, WorkoutEntry
"""

from workout_tracker.domain.token import SCOPE_AUTHENTICATION, Token
from workout_tracker.domain.user import (
    ANONYMOUS,
    Anonymous,
    Authenticated,
    Identity,
    User,
)
from workout_tracker.domain.workout import Workout, WorkoutEntry

__all__ = [
    "ANONYMOUS",
    "SCOPE_AUTHENTICATION",
    "Anonymous",
    "Authenticated",
    "Identity",
    "Token",
    "User",
    "Workout",
    "WorkoutEntry",
]
