"""
BizTime Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error cases the API distinguishes.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and return
       a JSON error envelope with the matching HTTP status code.
Who:   Raised by services and by `database.translate_db_errors`.

Exception Hierarchy:
    BizTimeError (base)              → 500 Internal Server Error
    ├── NotFoundError                → 404 Not Found
    ├── ConstraintViolationError     → 409 Conflict
    └── DatabaseError                → 500 Internal Server Error

Error envelope (all handlers):
    {"error": {"message": "...", "status": 404, "request_id": "a1b2c3d4"}}
"""

from typing import Any, Dict, Optional


class BizTimeError(Exception):
    """
    Base exception for all BizTime application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BizTimeError):
    """
    Raised when a keyed lookup or keyed mutation matched zero rows.

    When:    GET/PUT/DELETE /companies/{code} or /invoices/{id} with an unknown key.
    HTTP:    404 Not Found

    Example:
        NotFoundError(resource="Company", resource_id="acme")
        → "Company not found: acme"
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} not found: {resource_id}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConstraintViolationError(BizTimeError):
    """
    Raised when the store rejects a write because of a schema constraint.

    When:    Duplicate company code or name, invoice for an unknown company,
             deleting a company that still owns invoices, NULL in a required column.
    HTTP:    409 Conflict

    The constraint name and driver message stay in `context` for the server log.
    """

    status_code = 409

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BizTimeError):
    """
    Raised when a database operation fails for any reason other than a constraint.

    When:    Connection lost mid-query, driver data errors, deadlocks.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; SQL text and driver
    details are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
