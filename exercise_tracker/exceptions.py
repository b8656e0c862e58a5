"""
Exercise Tracker — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise these; global handlers in main.py turn them into
       structured JSON error responses with the right HTTP status code,
       without leaking internal details to the client.
How:   Each exception carries a user-facing message and an optional context
       dict (logged, returned only as `details` for validation errors).

Exception Hierarchy:
    ExerciseTrackerError (base)  → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (malformed id, date, field)
    ├── NotFoundError            → 404 Not Found (user absent)
    └── DatabaseError            → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class ExerciseTrackerError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ExerciseTrackerError):
    """
    Raised when client input fails validation.

    When:    Malformed user id, unparseable `from`/`to` date, missing
             description or duration, unparseable exercise date.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid \"from\" date format",
            "details": {"field": "from", "value": "not-a-date"}
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


class NotFoundError(ExerciseTrackerError):
    """
    Raised when a requested resource does not exist.

    When:    A well-formed user id that matches no stored user.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so routes stay free of HTTP logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ExerciseTrackerError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message is one of a few fixed strings ("Failed to add user", ...).
    The underlying driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
