"""
Test configuration and fixtures for the Preinscription API.

Every test gets its own SQLite database file so signups never leak between
tests. Set TEST_DATABASE_URL to a PostgreSQL URL to also run the tests that
need a real server.
"""

import os
import sqlite3
from pathlib import Path
from typing import Callable, Generator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.testclient import TestClient

load_dotenv()

# Read by the module-level app when preinscription.main is imported
os.environ.setdefault("LOG_DIR", "")

from preinscription.main import create_app  # noqa: E402
from preinscription.platform.config import Settings  # noqa: E402
from preinscription.platform.db.init_db import ensure_schema  # noqa: E402
from preinscription.platform.db.session import Database  # noqa: E402


def _make_settings(**overrides) -> Settings:
    values = {"LOG_DIR": "", "ALLOWED_ORIGINS": "", "ENVIRONMENT": "local"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Settings isolated from any local .env file."""
    return _make_settings


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "preinscription.db"


@pytest.fixture
def settings(db_path: Path) -> Settings:
    return _make_settings(DATABASE_URL=f"sqlite+aiosqlite:///{db_path}")


@pytest.fixture
def app_factory(db_path: Path) -> Callable[..., FastAPI]:
    """Build an app on the per-test database with some settings overridden."""

    def _factory(**overrides) -> FastAPI:
        overrides.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
        return create_app(_make_settings(**overrides))

    return _factory


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """
    TestClient with the lifespan running, so the schema exists and
    app.state.database is set.
    """
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def stored_rows(db_path: Path) -> Callable[[], list]:
    """Read the signup table straight from the SQLite file."""

    def _rows() -> list:
        with sqlite3.connect(db_path) as conn:
            return conn.execute(
                "SELECT email, country, interest, lang FROM preinscriptions ORDER BY id"
            ).fetchall()

    return _rows


@pytest_asyncio.fixture
async def database(settings: Settings):
    database = Database.from_settings(settings)
    await ensure_schema(database.engine)
    yield database
    await database.dispose()
