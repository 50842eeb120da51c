"""SQLAlchemy ORM models for the workout tracker.

All models are exported from this module for convenient imports:
    from workout_tracker.models import User, Token, Workout, WorkoutEntry

Models are organized by domain:
- user.py: User
- token.py: Token (bearer token digests, FK -> users)
- workout.py: Workout, WorkoutEntry (entries cascade with their workout)
"""

from workout_tracker.models.base import Base
from workout_tracker.models.token import Token
from workout_tracker.models.user import User
from workout_tracker.models.workout import Workout, WorkoutEntry

__all__ = [
    "Base",
    "Token",
    "User",
    "Workout",
    "WorkoutEntry",
]
