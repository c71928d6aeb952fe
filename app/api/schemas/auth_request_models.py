"""Request models for auth API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginUserRequest(BaseModel):
    """Request model for user login.

    The 72-byte bcrypt limit is enforced by the auth service so that clients
    get the dedicated `password_too_long` error rather than a generic one.
    """

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"email": "test@example.com", "password": "password"}]}
    )

    email: EmailStr = Field(..., max_length=320, description="Valid email address")
    password: str = Field(..., min_length=1, description="Account password")
