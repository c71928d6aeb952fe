"""Response models for meta API endpoints (hello, health)."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

HELLO_MESSAGE = "Hello World from BYU 590R Monorepo!"
SERVICE_NAME = "byu-590r-monorepo-backend"
SERVICE_VERSION = "1.0.0"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with microseconds and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


class HelloResponse(BaseModel):
    """Response model for the hello endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "message": HELLO_MESSAGE,
                    "status": "success",
                    "timestamp": "2025-01-01T12:00:00.000000Z",
                }
            ]
        }
    )

    message: str = HELLO_MESSAGE
    status: str = "success"
    timestamp: str = Field(default_factory=utc_timestamp)


class HealthResponse(BaseModel):
    """Response model for health check."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "healthy",
                    "service": SERVICE_NAME,
                    "version": SERVICE_VERSION,
                    "timestamp": "2025-01-01T12:00:00.000000Z",
                }
            ]
        }
    )

    status: str = Field("healthy", description="Service status")
    service: str = SERVICE_NAME
    version: str = SERVICE_VERSION
    timestamp: str = Field(default_factory=utc_timestamp)
