"""
Repairs API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the four error kinds a request can hit.
How:   Each exception carries a message, an HTTP status code and an optional
       context dict. Global exception handlers (registered in main.py) turn them
       into `{"error": <message>}` JSON responses.
Who:   Raised by the store and the repair service; caught by global handlers.

Exception Hierarchy:
    RepairsAPIError (base)
    ├── InvalidIdError             → 400 Bad Request
    ├── MalformedBodyError         → 400 Bad Request
    ├── NotFoundError              → 404 Not Found
    └── UnsupportedMediaTypeError  → 415 Unsupported Media Type

None of these are raised after a store mutation has started, so a failed
request never leaves a partial change behind.
"""

from typing import Any, Dict, Optional


class RepairsAPIError(Exception):
    """
    Base exception for all Repairs API errors.

    Attributes:
        message:      User-facing error description (returned in the response body)
        context:      Additional debug info (logged, NOT returned to the client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidIdError(RepairsAPIError):
    """Raised when an id path/body parameter is missing or not an integer."""

    status_code = 400

    def __init__(
        self,
        raw_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="Invalid or missing id parameter", context=ctx)
        self.raw_id = raw_id


class MalformedBodyError(RepairsAPIError):
    """
    Raised when a request body is not JSON or not the expected shape.

    The optional `detail` (e.g. "title: Field required") is appended to the
    message so callers can see which field was rejected.
    """

    status_code = 400

    def __init__(
        self,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = "Invalid JSON in request body"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message=message, context=context)
        self.detail = detail


class NotFoundError(RepairsAPIError):
    """Raised when no live repair has the requested id."""

    status_code = 404

    def __init__(
        self,
        repair_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if repair_id is not None:
            ctx["repair_id"] = repair_id
        super().__init__(message="Repair not found", context=ctx)
        self.repair_id = repair_id


class UnsupportedMediaTypeError(RepairsAPIError):
    """Raised when a request with a body does not declare application/json."""

    status_code = 415

    def __init__(
        self,
        content_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["content_type"] = content_type
        super().__init__(
            message="Unsupported Media Type. Please use 'application/json'.",
            context=ctx,
        )
        self.content_type = content_type
