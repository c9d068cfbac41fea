"""
Todo Backend: Database Engine & Session Management
=====================================================

What:  Async SQLAlchemy engine construction, session factory, and the
       FastAPI dependency that hands one session to each request.
How:   create_app() builds one engine (the connection pool) and one session
       factory and stores both on `app.state`. `get_db_session` reads the
       factory from the current request's app, so the pool is an injected
       dependency rather than a module global.
Who:   Engine helpers are used by app.main; the dependency by route handlers.
When:  Engine at app construction; sessions per request.

Connection Pooling:
    pool_size / max_overflow bound concurrent connections (defaults 5 / 0).
    pool_pre_ping checks a connection before reuse.
    pool_recycle=3600 retires connections after an hour.
    SQLite URLs get SQLAlchemy's own pool defaults (no sizing arguments).
"""

from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, used by init_models() to create tables.
    """
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine (and its connection pool) from settings.

    No connection is opened here; the pool connects lazily on first use.
    """
    options: Dict[str, Any] = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: returned rows stay readable after commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the session factory installed on app.state by create_app()
        2. Yields a fresh session to the route handler
        3. On error: rolls back, then re-raises for the global error handler
        4. Always: closes the session (returns the connection to the pool)

    Write operations commit inside the service, one statement at a time,
    so nothing is committed here.

    Tests substitute a fake with `app.dependency_overrides[get_db_session]`.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(engine: AsyncEngine) -> None:
    """
    Create any missing tables registered on Base.metadata.

    Idempotent (CREATE TABLE IF NOT EXISTS semantics). Not a migration tool:
    existing tables are never altered.
    """
    # Registers the todo table with Base.metadata
    from app.models import todo  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called during application shutdown."""
    await engine.dispose()
