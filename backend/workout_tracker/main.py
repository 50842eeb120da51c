"""FastAPI application entry point.

REST API with versioned routing and consistent error handling.

This module creates and configures the FastAPI application, including:
- Exception handlers for API errors
- API v1 router mounting
- Health check endpoint
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from workout_tracker.api.v1.router import router as v1_router
from workout_tracker.core.config import settings
from workout_tracker.core.errors import APIError, PersistenceError, ValidationError
from workout_tracker.core.rate_limiting import limiter, rate_limit_exceeded_handler
from workout_tracker.core.responses import ErrorDetail, ErrorResponse

logger = structlog.get_logger()


def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors.

    Return consistent error envelope. Server-side failures are logged with
    their cause; the client only sees the generic message.

    Args:
        request: The incoming request.
        exc: The APIError that was raised.

    Returns:
        JSONResponse with error envelope and appropriate status code.
    """
    if isinstance(exc, PersistenceError):
        logger.error(
            "Persistence failure",
            operation=exc.operation,
            path=str(request.url.path),
            cause=repr(exc.__cause__),
        )

    # 401 depends on the Authorization header, same as the success path
    headers = {"Vary": "Authorization"} if exc.status_code == 401 else None

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            )
        ).model_dump(),
        headers=headers,
    )


def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors from FastAPI.

    Converts FastAPI's validation errors to a ValidationError and renders
    it through api_error_handler.

    Args:
        request: The incoming request.
        exc: The RequestValidationError from Pydantic.

    Returns:
        JSONResponse with VALIDATION_ERROR code and field-level details.
    """
    error = ValidationError(
        "Request validation failed",
        details=[
            {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
            for e in exc.errors()
        ],
    )
    return api_error_handler(request, error)


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Returns 500 INTERNAL_ERROR without exposing stack traces.

    WHY: Never expose internal error details to clients. Log for debugging.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with generic error message (500).
    """
    logger.exception("Unhandled exception", exc_info=exc, path=str(request.url.path))

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
            )
        ).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    WHY FACTORY FUNCTION:
    - Enables testing with different configurations
    - Clear separation between app creation and startup
    - Standard FastAPI pattern

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Workout Tracker API",
        version="1.0.0",
        description="Track workouts and their exercise entries",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
    )

    # Register exception handlers
    # Order matters: specific handlers first, then catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.state.limiter = limiter

    # Include v1 router at /api/v1
    app.include_router(v1_router, prefix="/api/v1")

    # Health check endpoint (outside versioned API)
    @app.get("/health")
    def health_check() -> dict:
        """Health check endpoint for monitoring.

        Returns:
            {"status": "available"} if service is running.
        """
        return {"status": "available"}

    return app


# Create the application instance
# Used by uvicorn: uvicorn workout_tracker.main:app
app = create_app()
