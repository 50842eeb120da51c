"""API error classes.

HTTP status codes and error codes for everything the core can signal.

WHY CUSTOM ERROR CLASSES:
- Consistent error response format across all endpoints
- Easy to map to HTTP status codes in exception handlers
- Type-safe error handling in services/repositories
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400).

    Use for request body validation errors, path param errors, etc.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class UnauthorizedError(APIError):
    """Authentication required (401).

    Use when no valid auth credentials provided.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Username/password pair rejected (401).

    Raised for an unknown username and for a wrong password alike.

    WHY ONE ERROR FOR BOTH:
    - A distinct "no such user" response enables username enumeration
    - The real cause is logged server-side for operators
    """

    def __init__(self) -> None:
        APIError.__init__(
            self,
            code="INVALID_CREDENTIALS",
            message="Invalid username or password",
            status_code=401,
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Use when requested resource doesn't exist OR doesn't belong to user.

    WHY NOT SEPARATE "FORBIDDEN" FOR WRONG OWNERSHIP:
    - Revealing "exists but not yours" leaks information
    - From user perspective, resource simply doesn't exist
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class ConflictError(APIError):
    """Duplicate or conflicting resource (409).

    Use for duplicate entries, conflicting state, etc.
    Accepts custom code for specific conflict types.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details,
        )


class PersistenceError(APIError):
    """Storage or transaction failure (500).

    The message stays generic; the underlying database error is chained
    (``raise ... from exc``) and logged, never returned to the client.

    Args:
        operation: Store operation that failed (e.g., "create_workout").
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            code="PERSISTENCE_ERROR",
            message="A storage error occurred",
            status_code=500,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )


class HashingError(Exception):
    """Password hashing or verification failed for a reason other than mismatch.

    Examples: malformed stored hash, password bcrypt refuses to hash.
    A wrong password is never a HashingError.
    """
