# Middleware package init
"""
Todo Backend: Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate the correlation ID first
    2. Logging: log method, path, status and duration with that ID
    3. GZip / CORS: provided by Starlette/FastAPI

    Responses travel back through the chain in reverse, so the request ID
    header is present and the logged status is the final one.
"""
