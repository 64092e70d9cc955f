"""
Endpoint Registry — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every error scenario.
Why:   Each kind maps to exactly one HTTP status code and a safe,
       human-readable message. Global handlers (registered in main.py)
       turn them into structured JSON error responses.
How:   Each exception carries a message and an optional context dict.
       The message is returned to the client; the context is logged only.

Exception Hierarchy:
    EndpointRegistryError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    ├── NotFoundError              → 404 Not Found
    ├── ConflictError              → 409 Conflict (unique name taken)
    ├── DatabaseError              → 500 Internal Server Error
    └── StorageError               → never leaves the service layer
        └── UniqueConstraintViolation

Storage errors vs HTTP-facing errors:
    The repository raises StorageError / UniqueConstraintViolation after
    inspecting the driver exception. The service matches on those types and
    re-raises ConflictError or DatabaseError with an operation-specific
    message. Routes never see raw SQLAlchemy exceptions.
"""

from typing import Any, Dict, Optional


class EndpointRegistryError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EndpointRegistryError):
    """
    Raised when client input fails validation.

    When:    Missing required fields (name, path, method) or a malformed body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing required fields: name, path, method",
            "details": {"missing": ["method"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(EndpointRegistryError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /endpoints/{id} with an unknown (or malformed) id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class ConflictError(EndpointRegistryError):
    """
    Raised when a write collides with an existing record.

    When:    Create or update with a name another record already uses.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(EndpointRegistryError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost, query failed, anything that is not a conflict.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic per operation.
        Driver details (SQL, constraint names) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Storage-layer variants (raised by repositories, matched by services)
# ══════════════════════════════════════════════════════════════════════════


class StorageError(EndpointRegistryError):
    """
    Any failure reported by the storage layer.

    `original` keeps the driver exception for logging; `operation` names the
    repository call that failed.
    """

    def __init__(
        self,
        operation: str,
        original: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation
        if original is not None:
            ctx["original_error"] = type(original).__name__
        super().__init__(message=f"Storage operation '{operation}' failed", context=ctx)
        self.operation = operation
        self.original = original


class UniqueConstraintViolation(StorageError):
    """A write was rejected by a unique constraint in the database."""
