from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import status

from app.core.errors import ErrorResponse

OpenAPIResponses = dict[int | str, dict[str, Any]]


@dataclass(frozen=True)
class ErrorExample:
    status_code: int
    error: str
    message: str
    description: str
    summary: str | None = None
    details: Any | None = None
    example_name: str | None = None


def error_responses(*examples: ErrorExample) -> OpenAPIResponses:
    """Build a FastAPI `responses=` mapping with one named example per error."""
    responses: OpenAPIResponses = {}
    for example in examples:
        response = responses.setdefault(
            example.status_code,
            {
                "model": ErrorResponse,
                "description": example.description,
                "content": {"application/json": {"examples": {}}},
            },
        )

        payload: dict[str, Any] = {"error": example.error, "message": example.message}
        if example.details is not None:
            payload["details"] = example.details

        response["content"]["application/json"]["examples"][
            example.example_name or example.error
        ] = {"summary": example.summary or example.description, "value": payload}

    return responses


RATE_LIMITED = ErrorExample(
    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    error="rate_limited",
    message="Too many requests",
    description="Rate limit exceeded",
    summary="Too many requests",
)

UNAUTHORIZED = ErrorExample(
    status_code=status.HTTP_401_UNAUTHORIZED,
    error="unauthorized",
    message="Could not validate credentials",
    description="Missing or invalid token",
    summary="Unauthorized",
)

INVALID_CREDENTIALS = ErrorExample(
    status_code=status.HTTP_401_UNAUTHORIZED,
    error="invalid_credentials",
    message="Incorrect email or password",
    description="Invalid credentials",
    summary="Invalid email or password",
)

PASSWORD_TOO_LONG = ErrorExample(
    status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
    error="password_too_long",
    message="Password must not exceed 72 bytes when UTF-8 encoded",
    description="Invalid login input",
    summary="Password too long",
)
