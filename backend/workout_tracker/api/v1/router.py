"""API v1 router aggregator.

URL structure with /api/v1 prefix. All v1 endpoint routers are included here.
"""

from fastapi import APIRouter

from workout_tracker.api.v1 import tokens, users, workouts

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])

# =============================================================================
# Core Resource Routers
# =============================================================================

router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
