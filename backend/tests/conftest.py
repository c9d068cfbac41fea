"""
Todo Backend: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers this file and exposes its fixtures to all tests.

Fixture Inventory (all function-scoped):
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── todo_service:     TodoService with default options
    ├── test_settings:    Settings pointing at a per-test SQLite file
    ├── db_engine:        aiosqlite engine with the todo table created
    ├── test_app:         create_app() wired to db_engine
    └── test_client:      HTTPX AsyncClient talking to test_app
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Must run before any `app` import: the module-level app in app.main builds
# its engine from these values.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import Settings
from app.database import init_models
from app.services.todo_service import TodoService


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = result
        await service.list_todos(mock_db_session, FetchFilter())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def todo_service():
    return TodoService(default_category="default")


@pytest.fixture
def test_settings(tmp_path):
    """Settings backed by a throwaway SQLite database file."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}",
        log_level="WARNING",
        db_create_tables=False,
        default_category="default",
    )


@pytest_asyncio.fixture
async def db_engine(test_settings):
    """Async SQLite engine with the todo table created."""
    engine = create_async_engine(test_settings.database_url)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_app(test_settings, db_engine):
    from app.main import create_app
    return create_app(settings=test_settings, engine=db_engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    ASGITransport does not run the lifespan; db_engine already created the
    table.

    Usage:
        response = await test_client.get("/api/todos/")
        assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
