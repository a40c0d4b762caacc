"""Error Hierarchy — typed exceptions for all IntroHub failure modes.

Invariants:
    - Every error has a code (str), severity (ErrorSeverity) and HTTP status
    - Domain errors (400-level) log at warning; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": message, "code": code}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with IntroHubError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Access denial on request reads uses ResourceNotFoundError, not ForbiddenError
      (ADR: do not leak existence of other users' requests)
    - Schema-level validation failures are FastAPI's RequestValidationError, not a
      subclass here
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity; selects the log level in the global handler."""
    WARNING = "warning"
    CRITICAL = "critical"


class IntroHubError(Exception):
    """Base exception for all IntroHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(IntroHubError):
    """Arguments are well-formed but inconsistent with stored data."""
    def __init__(self, message: str):
        super().__init__(message, "INVALID_ARGUMENT", ErrorSeverity.WARNING, 400)


class UnauthorizedError(IntroHubError):
    """Missing, malformed or rejected credentials."""
    def __init__(self, message: str):
        super().__init__(message, "UNAUTHORIZED", ErrorSeverity.WARNING, 401)


class ForbiddenError(IntroHubError):
    """Authenticated caller is not permitted to perform the operation."""
    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN", ErrorSeverity.WARNING, 403)


class ResourceNotFoundError(IntroHubError):
    """Requested resource does not exist (or is masked as missing)."""
    def __init__(self, resource_type: str):
        super().__init__(
            f"{resource_type} not found", "RESOURCE_NOT_FOUND",
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type


class ConflictError(IntroHubError):
    """Uniqueness or duplicate violation."""
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", ErrorSeverity.WARNING, 409)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(IntroHubError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}", "DATABASE_ERROR",
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation
