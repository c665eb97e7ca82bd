"""
Chambre API: Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios of the room API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ChambreError (base)
    ├── ValidationError   → 400 Bad Request (missing field, enum, uniqueness)
    ├── NotFoundError     → 404 Not Found (absent or malformed identifier)
    └── DatabaseError     → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, List, Optional


class ChambreError(Exception):
    """
    Base exception for all Chambre API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ChambreError):
    """
    Raised when a request payload fails validation.

    When:    Missing required field, value outside the allowed set or range,
             or a roomNumber that is already taken.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Room validation failed",
            "details": {"errors": [{"field": "type", "message": "..."}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class NotFoundError(ChambreError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /rooms/{id} with an unknown or malformed id.
    HTTP:    404 Not Found

    The store returns None for missing rows; services convert that into
    this exception so routes never check for None themselves.
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


class DatabaseError(ChambreError):
    """
    Raised when store operations fail unexpectedly.

    When:    Connection lost, driver error, unexpected constraint failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (operation name, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
