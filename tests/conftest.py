"""Pytest configuration and shared fixtures.

Settings are validated when `app.core.config` is first imported, so the test
environment is pinned here before anything from `app` is imported.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

TEST_DATABASE_PATH = Path(tempfile.gettempdir()) / f"byu590r-backend-test-{os.getpid()}.db"
TEST_JWT_SECRET = "Test-Only-JWT-Secret-Key-0123456789!"

os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = TEST_JWT_SECRET
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DATABASE_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["RATE_LIMIT_STORAGE_URL"] = "memory://"
os.environ["SEED_DATABASE"] = "true"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ.pop("OPENAI_API_KEY", None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.core.lifespan import lifespan  # noqa: E402
from app.main import create_app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database() -> Iterator[None]:
    """Start from an empty SQLite file and delete it after the run."""
    TEST_DATABASE_PATH.unlink(missing_ok=True)
    yield
    TEST_DATABASE_PATH.unlink(missing_ok=True)


# Synchronous fixtures


@pytest.fixture(scope="function")
def app() -> FastAPI:
    """Creates a fresh FastAPI app for one test."""
    return create_app()


@pytest.fixture(scope="function")
def http_client(app: FastAPI) -> Iterator[TestClient]:
    """Synchronous client; entering it runs the lifespan, which seeds the test user."""
    with TestClient(app) as client:
        yield client


# Async fixtures


@pytest_asyncio.fixture(scope="function")
async def async_http_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async client over ASGITransport, wrapped in the app lifespan (ASGITransport skips it)."""
    async with lifespan(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest_asyncio.fixture(scope="function")
async def access_token(async_http_client: AsyncClient) -> str:
    """Bearer token for the seeded test user."""
    response = await async_http_client.post(
        "/api/login",
        json={"email": settings.seed_user_email, "password": settings.seed_user_password},
    )
    assert response.status_code == 200, response.text
    return str(response.json()["results"]["token"])
