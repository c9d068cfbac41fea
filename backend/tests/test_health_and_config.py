"""
Todo Backend: Health Route, Settings and Error Kind Tests
===========================================================
"""

import logging
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.database import dispose_engine
from app.exceptions import DatabaseError, ErrorKind, NotFoundError, ValidationError
from app.main import create_app
from app.middleware.logging import level_for_status


def _sqlite_settings(path, **overrides):
    values = dict(
        database_url=f"sqlite+aiosqlite:///{path}",
        log_level="WARNING",
        db_create_tables=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_database_unreachable(self, tmp_path):
        # SQLite cannot create a file inside a directory that does not exist
        app = create_app(settings=_sqlite_settings(tmp_path / "missing" / "todos.db"))
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/health")
        finally:
            await app.state.engine.dispose()

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_creates_table_and_shutdown_disposes_engine(self, tmp_path):
        app = create_app(
            settings=_sqlite_settings(tmp_path / "fresh.db", db_create_tables=True)
        )
        engine = app.state.engine

        with patch("app.main.setup_logging") as setup_logging, patch(
            "app.main.dispose_engine", wraps=dispose_engine
        ) as dispose:
            async with app.router.lifespan_context(app):
                setup_logging.assert_called_once_with("WARNING")
                transport = ASGITransport(app=app)
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    created = await client.post(
                        "/api/todos/", json={"title": "T", "completed": False, "category": ""}
                    )
                    listed = await client.get("/api/todos/")

                dispose.assert_not_awaited()

        assert created.status_code == 201
        assert listed.json() == [{"id": 1, "title": "T", "completed": False, "category": "default"}]
        dispose.assert_awaited_once_with(engine)

    @pytest.mark.asyncio
    async def test_startup_skips_table_creation_when_disabled(self, tmp_path):
        app = create_app(settings=_sqlite_settings(tmp_path / "bare.db"))

        with patch("app.main.setup_logging"), patch("app.main.init_models") as init_models:
            async with app.router.lifespan_context(app):
                pass

        init_models.assert_not_called()


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db")

        assert settings.backend_port == 8080
        assert settings.default_category == "default"
        assert settings.cors_origins_list == ["*"]
        assert settings.search_escape_wildcards is False

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("mysql://u:p@db:3306/todos", "mysql+aiomysql://u:p@db:3306/todos"),
            ("postgres://u:p@db/todos", "postgresql+asyncpg://u:p@db/todos"),
            ("postgresql://u:p@db/todos", "postgresql+asyncpg://u:p@db/todos"),
            ("mysql+aiomysql://u:p@db/todos", "mysql+aiomysql://u:p@db/todos"),
        ],
    )
    def test_database_url_normalized_to_async_driver(self, url, expected):
        assert Settings(_env_file=None, database_url=url).database_url == expected

    def test_empty_database_url_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, database_url="  ")

    def test_log_level_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.example, http://b.example")

        assert settings.cors_origins_list == ["http://a.example", "http://b.example"]

    def test_env_variables(self, monkeypatch):
        monkeypatch.setenv("BACKEND_PORT", "9090")
        monkeypatch.setenv("DEFAULT_CATEGORY", "默认")

        settings = Settings(_env_file=None)

        assert settings.backend_port == 9090
        assert settings.default_category == "默认"


class TestErrorKinds:

    @pytest.mark.parametrize(
        "exc, kind, status",
        [
            (ValidationError(), ErrorKind.VALIDATION, 400),
            (NotFoundError(resource="todo", resource_id="3"), ErrorKind.NOT_FOUND, 404),
            (DatabaseError(), ErrorKind.STORE_FAILURE, 500),
        ],
    )
    def test_kind_and_status(self, exc, kind, status):
        assert exc.kind is kind
        assert exc.status_code == status

    def test_not_found_message(self):
        assert NotFoundError(resource="todo", resource_id="3").message == "todo with ID '3' was not found"


@pytest.mark.parametrize(
    "status, level",
    [(200, logging.INFO), (201, logging.INFO), (400, logging.WARNING), (500, logging.ERROR)],
)
def test_access_log_level(status, level):
    assert level_for_status(status) == level
