"""Integration tests for API rate limiting."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import status
from httpx import AsyncClient

from app.core.rate_limit import limiter


@pytest.fixture
def rate_limiting_on(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Enable the limiter (disabled for the rest of the suite) on clean storage."""
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield
    limiter.reset()


class TestRateLimits:
    """Test API rate limit behavior."""

    @pytest.mark.asyncio
    async def test_login_rate_limited(
        self, rate_limiting_on: None, async_http_client: AsyncClient
    ) -> None:
        """Test that login allows ten attempts per minute per IP."""
        # Arrange
        payload = {"email": "test@example.com", "password": "wrongpassword"}
        statuses: list[int] = []

        # Act
        for _ in range(11):
            response = await async_http_client.post("/api/login", json=payload)
            statuses.append(response.status_code)

        # Assert
        assert statuses[:10] == [status.HTTP_401_UNAUTHORIZED] * 10
        assert statuses[10] == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {"error": "rate_limited", "message": "Too many requests"}

    @pytest.mark.asyncio
    async def test_health_not_limited_by_login_budget(
        self, rate_limiting_on: None, async_http_client: AsyncClient
    ) -> None:
        payload = {"email": "test@example.com", "password": "wrongpassword"}
        for _ in range(11):
            await async_http_client.post("/api/login", json=payload)

        response = await async_http_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
