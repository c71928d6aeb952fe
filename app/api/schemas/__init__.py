"""API request and response schemas.

Import request/response models from the submodules (e.g. auth_request_models,
auth_response_models) or from this package for a single entry point.
"""

from __future__ import annotations

from app.api.schemas.auth_request_models import LoginUserRequest
from app.api.schemas.auth_response_models import LoginResponse, LoginResults, UserResponse
from app.api.schemas.meta_response_models import HealthResponse, HelloResponse

__all__ = [
    "HealthResponse",
    "HelloResponse",
    "LoginResponse",
    "LoginResults",
    "LoginUserRequest",
    "UserResponse",
]
