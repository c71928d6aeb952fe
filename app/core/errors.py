from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

logger = logging.getLogger(__name__)

ERROR_CODE_BY_STATUS: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
    429: "rate_limited",
    500: "internal_error",
    503: "service_unavailable",
}


class ErrorResponse(BaseModel):
    """Standardized error response payload."""

    error: str
    message: str
    details: Any | None = None


def build_http_error(
    status_code: int,
    error: str,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error=error, message=message, details=details).model_dump(
            exclude_none=True
        ),
        headers=headers,
    )


def _map_status_to_error(status_code: int) -> str:
    return ERROR_CODE_BY_STATUS.get(status_code, "error")


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _error_response(
    status_code: int,
    message: str | None = None,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(
        error=_map_status_to_error(status_code),
        message=message or _status_phrase(status_code),
        details=details,
    ).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        return _error_response(HTTP_500_INTERNAL_SERVER_ERROR)
    headers = getattr(exc, "headers", None)
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail and "message" in detail:
        payload = ErrorResponse.model_validate(detail).model_dump(exclude_none=True)
        return JSONResponse(status_code=exc.status_code, content=payload, headers=headers)
    return _error_response(
        exc.status_code,
        message=str(detail) if detail else None,
        headers=headers,
    )


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return _error_response(HTTP_500_INTERNAL_SERVER_ERROR)


def request_validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        return _error_response(HTTP_500_INTERNAL_SERVER_ERROR)
    return _error_response(
        422,
        message="Request validation failed",
        details=jsonable_errors(exc.errors()),
    )


def rate_limit_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        429,
        message="Too many requests",
        headers=getattr(exc, "headers", None),
    )


def jsonable_errors(errors: Any) -> list[dict[str, Any]]:
    """Drop non-serializable validator context (e.g. the raised ValueError) from errors."""
    cleaned: list[dict[str, Any]] = []
    for error in errors:
        item = {key: value for key, value in dict(error).items() if key != "ctx"}
        if "ctx" in error:
            item["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(item)
    return cleaned


async def unhandled_exception_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Answer exceptions escaping the app with the 500 envelope.

    Starlette hands `Exception` handlers to the outermost middleware, outside
    CORS. Catching here keeps the response inside the CORS layer.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return unhandled_exception_handler(request, exc)
