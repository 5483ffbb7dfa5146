"""
Blade Stock Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-safe message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON responses with the matching HTTP status code.
Who:   Raised by services and the password gate; caught by global handlers.

Exception Hierarchy:
    BladeStockError (base)
    ├── AuthorizationError       → 403 Forbidden (missing / wrong stock password)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error (storage failure)
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class BladeStockError(Exception):
    """
    Base exception for all Blade Stock application errors.

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


class AuthorizationError(BladeStockError):
    """
    Raised by the stock password gate.

    When:    The request body carries no password, or the wrong one.
    HTTP:    403 Forbidden

    There is a single shared secret and no identity, so there is nothing
    to "authenticate"; the request is simply not permitted.
    """

    def __init__(
        self,
        message: str = "Incorrect password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BladeStockError):
    """
    Raised when a requested resource does not exist.

    When:    DELETE /api/logs/{id} with an id that matches no row.
    HTTP:    404 Not Found

    An explicit message overrides the generated one, e.g.
    NotFoundError(resource="log entry", message="Log entry not found").
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(BladeStockError):
    """
    Raised when a storage operation fails.

    When:    Connection lost, constraint violation (e.g. a null key column),
             any SQLAlchemyError inside a service.
    HTTP:    500 Internal Server Error

    The client always receives a generic message. The context (operation,
    original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(BladeStockError):
    """
    Raised when a client sends too many mutating requests.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
