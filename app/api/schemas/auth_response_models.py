"""Response models for auth API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginResults(BaseModel):
    """Token and identity of the user that just signed in."""

    token: str = Field(..., description="Bearer access token (JWT)")
    name: str = Field(..., examples=["Test User"])
    email: str = Field(..., examples=["test@example.com"])


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": True,
                    "results": {
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "name": "Test User",
                        "email": "test@example.com",
                    },
                    "message": "User signed in",
                }
            ]
        }
    )

    success: bool = True
    results: LoginResults
    message: str = "User signed in"


class UserResponse(BaseModel):
    """Response model for user information."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
