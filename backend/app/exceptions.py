"""
Notekeeper Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the note handlers.
Why:   Services raise these instead of building HTTP responses; global
       handlers registered in main.py map each type to a status code and a
       consistent JSON envelope.
How:   Each exception class carries a user-facing message and an optional
       context dict (logged server-side, returned only where safe).

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError      → 400 Bad Request (missing/invalid field)
    ├── NotFoundError        → settings.not_found_status_code (400 by default)
    ├── DuplicateNoteError   → 409 Conflict
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

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


class ValidationError(NotekeeperError):
    """
    Raised when client input fails validation.

    When:    A required body field is missing or empty, `completed` is not a
             boolean, or the repository refused the record.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title field is required",
            "details": {"field": "title"}
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


class NotFoundError(NotekeeperError):
    """
    Raised when the requested note does not exist, or there are no notes.

    HTTP:    400 by default. Existing clients of this API treat "not found" as
             a client error; set NOT_FOUND_STATUS_CODE=404 to change it.
    """

    def __init__(
        self,
        message: str = "Note not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DuplicateNoteError(NotekeeperError):
    """
    Raised when another note already has the same (user, title, text).

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Duplicate note",
        existing_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if existing_id:
            ctx["existing_id"] = existing_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotekeeperError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Driver errors,
        SQL text, and constraint names are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
