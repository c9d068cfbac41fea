"""
Todo Backend: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires settings, the database engine (connection pool),
       the todo service, middleware, exception handlers and routers, and
       returns the app.
Who:   uvicorn imports `app.main:app`; tests call create_app() with their
       own settings and engine.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:      /api/todos/...      /health           │
    │                                                     │
    │  app.state:   settings, engine, session_factory,    │
    │               todo_service                          │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │    validation → 400 │ not found → 404 │ DB → 500    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables, log bind address
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from app import __version__
from app.config import Settings, settings as default_settings
from app.database import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
    init_models,
)
from app.exceptions import DatabaseError, TodoAppError, ValidationError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import health, todos
from app.services.todo_service import TodoService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # Override any existing logging config
    )

    # Third-party loggers that log every request/statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, optional table creation, readiness log.
    Shutdown: dispose the engine.
    """
    app_settings: Settings = app.state.settings
    engine: AsyncEngine = app.state.engine

    setup_logging(app_settings.log_level)
    logger.info("Todo Backend %s starting up...", __version__)

    if app_settings.db_create_tables:
        await init_models(engine)
        logger.info("Database tables ensured")

    logger.info(
        "Server ready at http://%s:%d",
        app_settings.backend_host,
        app_settings.backend_port,
    )

    yield

    logger.info("Todo Backend shutting down...")
    await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text HTTP responses.

    Handler table:
        RequestValidationError → 400 "Invalid request" (FastAPI request parsing)
        TodoAppError subclasses → exc.status_code, exc.message
            ValidationError 400, NotFoundError 404, DatabaseError 500
        Exception (fallback)   → 500 "Internal Server Error"

    Bodies never include driver errors, SQL or stack traces; those go to
    the server log.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request: %s", rid, exc.errors())
        return PlainTextResponse(
            ValidationError().message,
            status_code=ValidationError.status_code,
        )

    @app.exception_handler(TodoAppError)
    async def handle_app_error(request: Request, exc: TodoAppError):
        rid = request_id_var.get("")
        if isinstance(exc, DatabaseError):
            logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s error: %s", rid, exc.kind.value, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the process-wide settings.
        engine:   Pre-built AsyncEngine (connection pool). Built from
                  settings.database_url when omitted.

    Returns:
        FastAPI instance with its pool, service, middleware and routes wired.
    """
    settings = settings or default_settings
    if engine is None:
        engine = create_engine_from_settings(settings)

    app = FastAPI(
        title="Todo API",
        description="CRUD backend for todo records with title search and categories.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.todo_service = TodoService(
        default_category=settings.default_category,
        escape_wildcards=settings.search_escape_wildcards,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS

    # Fully open by default: any origin, method and header
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(todos.router)
    app.include_router(health.router)

    return app


# uvicorn entry point: `uvicorn app.main:app`
app = create_app()
