"""
Todo Backend: Request ID Middleware
=====================================

What:  Assigns a short correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   Reuses the client's X-Request-ID when present, otherwise generates
       one; stores it in a ContextVar (for loggers and exception handlers)
       and in request.state (for route handlers).
Who:   Applied to every request; outermost middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: each concurrent request sees its own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    """First 8 characters of a UUID4."""
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags each request with an ID for log correlation.

    Behavior:
        1. Use the client's X-Request-ID header if sent
        2. Otherwise generate a new 8-character ID
        3. Store it in request_id_var and request.state.request_id
        4. Echo it in the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        return response
