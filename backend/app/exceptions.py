"""
Todo Backend: Exception Hierarchy
===================================

What:  Application exceptions for the three failure kinds the API knows about.
How:   Each exception carries a message, an optional context dict, an
       ErrorKind and the HTTP status it maps to. Global handlers registered in
       main.py turn them into plain-text responses.
Who:   DatabaseError is raised by the service layer; the others exist for the
       interface boundary.

Exception Hierarchy:
    TodoAppError (base)
    ├── ValidationError   → 400 Bad Request     (kind: validation)
    ├── NotFoundError     → 404 Not Found       (kind: not_found)
    └── DatabaseError     → 500 Internal Error  (kind: store_failure)

The service never raises NotFoundError: update and delete do not check that
the target row exists, and a zero-row statement is reported as success.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds exposed at the HTTP boundary."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class TodoAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Caller-facing text (safe to return in the response body)
        context:  Debug details (logged, NOT returned to the client)
    """

    kind: ErrorKind = ErrorKind.STORE_FAILURE
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoAppError):
    """
    Raised when client input is rejected.

    Request-shape problems (missing `query`, non-integer id, malformed JSON)
    are caught earlier by FastAPI and answered with the same status.
    """

    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TodoAppError):
    """Raised when a requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

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


class DatabaseError(TodoAppError):
    """
    Raised when a database statement fails.

    Covers connectivity loss, constraint violations and timeouts alike; there
    is no distinction between transient and permanent failures. The message
    is the fixed per-operation text (e.g. "Failed to create todo"); the
    driver's error detail stays in `context` and the server log.
    """

    kind = ErrorKind.STORE_FAILURE
    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
