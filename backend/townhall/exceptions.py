"""
Townhall Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status.
Who:   Raised by repositories, services and the auth dependency.

Exception Hierarchy:
    TownhallError (base)
    ├── ValidationError          → 400 Bad Request
    ├── UnauthorizedError        → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TownhallError(Exception):
    """
    Base exception for all Townhall application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional detail; returned as ``details`` for client errors,
                  only logged for server errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TownhallError):
    """
    Raised when client input fails a business validation rule.

    Schema-level problems (missing fields, wrong types) are caught earlier by
    FastAPI and mapped to the same 400 response in main.py.
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


class UnauthorizedError(TownhallError):
    """Raised when a protected endpoint is called without valid credentials."""

    def __init__(
        self,
        message: str = "Valid credentials are required for this operation",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TownhallError):
    """
    Raised when an id-addressed operation targets a missing record.

    Repositories return None for missing rows; services convert that into
    this exception, naming the entity and the id that was asked for.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(TownhallError):
    """
    Raised when a write would break a uniqueness rule.

    When: Duplicate user email/mobile, duplicate hashtag name, a second like
    from the same user on the same discussion.
    """

    def __init__(
        self,
        resource: str = "resource",
        message: Optional[str] = None,
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource} conflicts with an existing record",
            context=ctx,
        )
        self.resource = resource


class DatabaseError(TownhallError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. The original error
    type is kept in context and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
