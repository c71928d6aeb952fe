"""Tests for application wiring: middleware, routes, static page."""

from __future__ import annotations

from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.core.rate_limit import limiter


def test_app_configuration(app: FastAPI) -> None:
    assert app.title == "byu-590r-monorepo-backend"
    assert app.state.limiter is limiter


def test_cors_middleware_configured(app: FastAPI) -> None:
    middlewares = [str(m) for m in app.user_middleware]
    assert any("CORSMiddleware" in m for m in middlewares)


def test_api_routes_published(app: FastAPI) -> None:
    paths = set(app.openapi()["paths"])
    assert {"/api/hello", "/api/health", "/api/login", "/api/user"} <= paths


def test_cors_header_on_cross_origin_request(http_client: TestClient) -> None:
    response = http_client.get("/api/health", headers={"Origin": "http://localhost"})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"]


def test_cors_preflight(http_client: TestClient) -> None:
    response = http_client.options(
        "/api/login",
        headers={
            "Origin": "http://localhost:4200",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"]
    assert "POST" in response.headers["access-control-allow-methods"]


def test_unknown_api_route_returns_json(http_client: TestClient) -> None:
    response = http_client.get("/api/does-not-exist")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "not_found", "message": "Not Found"}


def test_landing_page(http_client: TestClient) -> None:
    response = http_client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/html")
    assert "<title>BYU 590R Monorepo</title>" in response.text
    assert "Welcome to BYU 590R Monorepo" in response.text


def test_unhandled_error_keeps_cors_header(app: FastAPI, http_client: TestClient) -> None:
    async def explode() -> None:
        raise RuntimeError("boom")

    app.add_api_route("/api/explode", explode)

    response = http_client.get("/api/explode", headers={"Origin": "http://localhost"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "internal_error", "message": "Internal Server Error"}
    assert response.headers["access-control-allow-origin"]
