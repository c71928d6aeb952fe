from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import UnitOfWork, get_current_user, get_login_credentials, get_uow
from app.api.openapi_responses import (
    INVALID_CREDENTIALS,
    PASSWORD_TOO_LONG,
    RATE_LIMITED,
    UNAUTHORIZED,
    error_responses,
)
from app.api.schemas import LoginResponse, LoginResults, LoginUserRequest, UserResponse
from app.core.auth import create_access_token
from app.core.errors import build_http_error
from app.core.rate_limit import (
    AUTH_LOGIN_RATE_LIMIT,
    AUTH_USER_RATE_LIMIT,
    limit,
    rate_limit_ip_key,
    rate_limit_user_or_ip_key,
)
from app.db.models.user import User
from app.services.auth_service import (
    AuthenticationError,
    InvalidCredentialsError,
    PasswordTooLongError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    summary="Log in",
    description=(
        "Authenticate credentials sent as JSON or form data and return a bearer token "
        "together with the user's name."
    ),
    response_model=LoginResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": LoginUserRequest.model_json_schema(),
                },
                "multipart/form-data": {
                    "schema": LoginUserRequest.model_json_schema(),
                },
            },
        }
    },
    responses=error_responses(INVALID_CREDENTIALS, PASSWORD_TOO_LONG, RATE_LIMITED),
)
@limit(AUTH_LOGIN_RATE_LIMIT, key_func=rate_limit_ip_key)
async def login(
    request: Request,
    credentials: LoginUserRequest = Depends(get_login_credentials),
    uow: UnitOfWork = Depends(get_uow),
) -> LoginResponse:
    """Authenticate user and return JWT token."""
    try:
        user = await uow.auth_service.authenticate_user(credentials.email, credentials.password)
    except AuthenticationError as e:
        if isinstance(e, InvalidCredentialsError):
            status_code = status.HTTP_401_UNAUTHORIZED
        elif isinstance(e, PasswordTooLongError):
            status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
        else:
            status_code = status.HTTP_400_BAD_REQUEST
        headers = (
            {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
        )
        raise build_http_error(
            status_code=status_code,
            error=e.error_code,
            message=str(e),
            headers=headers,
        ) from e

    token = create_access_token(data={"sub": str(user.id)})
    logger.info("User signed in", extra={"user_id": user.id})
    return LoginResponse(results=LoginResults(token=token, name=user.name, email=user.email))


@router.get(
    "/user",
    summary="Get current user",
    description="Return the user for the provided bearer token.",
    response_model=UserResponse,
    responses=error_responses(UNAUTHORIZED, RATE_LIMITED),
)
@limit(AUTH_USER_RATE_LIMIT, key_func=rate_limit_user_or_ip_key)
async def get_user(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Get current authenticated user information."""
    return UserResponse.model_validate(current_user)
