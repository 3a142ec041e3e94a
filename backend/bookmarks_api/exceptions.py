"""
Bookmarks API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions rendered by the global handlers.
Why:   Targeted error handling with the right HTTP status and a response body
       that never leaks internal details.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by the route layer when a service result carries an error, and
       by the SQL store when the database fails.

Exception Hierarchy:
    BookmarksError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Services do not raise these for expected outcomes; they return a Result with
an ErrorKind (see services/results.py). The routes translate a failed Result
into one of these exceptions, so status codes are decided at the boundary only.
"""

from typing import Any, Dict, List, Optional


class BookmarksError(Exception):
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


class ValidationError(BookmarksError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "Validation failed",
            "fields": [{"field": "title", "message": "Title is required"}]
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.fields = fields or []


class NotFoundError(BookmarksError):
    """
    Raised when a requested bookmark does not exist.

    HTTP: 404 Not Found, body {"error": "Bookmark not found"}
    """

    def __init__(
        self,
        message: str = "Bookmark not found",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BookmarksError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    The message returned to the client is always generic. Details (statement,
    constraint name, driver error) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
