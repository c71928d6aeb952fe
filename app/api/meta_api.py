"""Meta API endpoints: hello and health smoke checks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from app.api.openapi_responses import RATE_LIMITED, error_responses
from app.api.schemas.meta_response_models import HealthResponse, HelloResponse
from app.core.rate_limit import META_RATE_LIMIT, limit, rate_limit_ip_key

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/hello",
    summary="Hello world",
    description="Return a fixed greeting with the current server time.",
    response_model=HelloResponse,
    responses=error_responses(RATE_LIMITED),
)
@limit(META_RATE_LIMIT, key_func=rate_limit_ip_key)
def hello(request: Request) -> HelloResponse:
    """Simple hello world endpoint."""
    return HelloResponse()


@router.get(
    "/health",
    summary="Health check",
    description="Report service name, version and current server time.",
    response_model=HealthResponse,
    responses=error_responses(RATE_LIMITED),
)
@limit(META_RATE_LIMIT, key_func=rate_limit_ip_key)
def health(request: Request) -> HealthResponse:
    """Check the health of the application."""
    logger.debug("Health check requested")
    return HealthResponse()
