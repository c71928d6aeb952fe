"""Unit tests for the JSON error envelope and exception handlers."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from app.core.errors import (
    build_http_error,
    http_exception_handler,
    jsonable_errors,
    rate_limit_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
    unhandled_exception_middleware,
)


def _request(path: str = "/api/test", method: str = "GET") -> Request:
    return Request(
        {"type": "http", "method": method, "path": path, "headers": [], "query_string": b""}
    )


def _body(response: object) -> dict[str, object]:
    return json.loads(response.body)  # type: ignore[attr-defined]


def test_build_http_error_carries_envelope() -> None:
    exc = build_http_error(
        status_code=status.HTTP_401_UNAUTHORIZED,
        error="invalid_credentials",
        message="Incorrect email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )

    assert exc.detail == {"error": "invalid_credentials", "message": "Incorrect email or password"}
    assert exc.headers == {"WWW-Authenticate": "Bearer"}


def test_http_exception_handler_passes_envelope_through() -> None:
    exc = build_http_error(status_code=401, error="unauthorized", message="nope")

    response = http_exception_handler(_request(), exc)

    assert response.status_code == 401
    assert _body(response) == {"error": "unauthorized", "message": "nope"}


def test_http_exception_handler_wraps_plain_detail() -> None:
    response = http_exception_handler(_request(), HTTPException(status_code=404))

    assert response.status_code == 404
    assert _body(response) == {"error": "not_found", "message": "Not Found"}


def test_http_exception_handler_unknown_status_code() -> None:
    response = http_exception_handler(_request(), HTTPException(status_code=418, detail="teapot"))

    assert _body(response) == {"error": "error", "message": "teapot"}


def test_request_validation_handler_includes_details() -> None:
    exc = RequestValidationError(
        [
            {
                "type": "value_error",
                "loc": ("body", "password"),
                "msg": "Value error, too long",
                "input": "x",
                "ctx": {"error": ValueError("too long")},
            }
        ]
    )

    response = request_validation_exception_handler(_request(), exc)

    assert response.status_code == 422
    body = _body(response)
    assert body["error"] == "validation_error"
    assert body["message"] == "Request validation failed"
    assert body["details"][0]["ctx"] == {"error": "too long"}  # type: ignore[index]


def test_rate_limit_handler() -> None:
    exc = MagicMock(headers={"Retry-After": "60"})

    response = rate_limit_exception_handler(_request(), exc)

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "60"
    assert _body(response) == {"error": "rate_limited", "message": "Too many requests"}


def test_unhandled_exception_handler_logs_and_hides_details(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.ERROR, logger="app.core.errors"):
        response = unhandled_exception_handler(_request("/boom", "POST"), ValueError("secret"))

    assert response.status_code == 500
    assert _body(response) == {"error": "internal_error", "message": "Internal Server Error"}
    assert "Unhandled exception" in caplog.text
    assert caplog.records[0].path == "/boom"  # type: ignore[attr-defined]


def test_jsonable_errors_without_ctx() -> None:
    errors = [{"type": "missing", "loc": ("body", "email"), "msg": "Field required"}]

    assert jsonable_errors(errors) == errors


@pytest.mark.asyncio
async def test_unhandled_exception_middleware_returns_envelope() -> None:
    async def call_next(request: Request) -> Response:
        raise RuntimeError("boom")

    response = await unhandled_exception_middleware(_request("/api/explode"), call_next)

    assert response.status_code == 500
    assert _body(response) == {"error": "internal_error", "message": "Internal Server Error"}


@pytest.mark.asyncio
async def test_unhandled_exception_middleware_passes_responses_through() -> None:
    ok = JSONResponse({"status": "ok"})

    async def call_next(request: Request) -> Response:
        return ok

    assert await unhandled_exception_middleware(_request(), call_next) is ok
