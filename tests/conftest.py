"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

The application reads its settings when ``app.config`` is first imported, so
the environment for the test database is set here, before any app import.
Every test that touches the database starts from freshly created tables in a
temporary SQLite file.
"""

import asyncio
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="notes-tests-"))
os.environ["NOTES_DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'test.db'}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_DIR"] = str(_TEST_DIR / "logs")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.db import reset_db  # noqa: E402

from .helpers import register  # noqa: E402


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Create a new application instance for the test session.
    """
    # Import the factory function here to ensure it's fresh for the test session.
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client over an empty database.
    The TestClient handles the application's lifespan events (startup/shutdown).
    """
    asyncio.run(reset_db())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(app: FastAPI, client: TestClient):
    """Factory for extra clients sharing the same database (one per user)."""
    extra: list[TestClient] = []

    def _make() -> TestClient:
        c = TestClient(app)
        extra.append(c)
        return c

    yield _make
    for c in extra:
        c.close()


@pytest_asyncio.fixture
async def db():
    """Fresh tables for tests that call the DB handlers directly."""
    await reset_db()
    yield


@pytest.fixture
def ana(client: TestClient) -> dict:
    """Ana registered and logged in on ``client`` through the session cookie."""
    response = register(client, "Ana", "ana@x.com")
    assert response.status_code == 201
    return response.json()
