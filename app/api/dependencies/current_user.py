"""Bearer-token guard for routes that need the signed-in user."""

from __future__ import annotations

from fastapi import Depends, status

from app.api.dependencies.unit_of_work import UnitOfWork, get_uow
from app.core.auth import oauth2_scheme
from app.core.errors import build_http_error
from app.db.models.user import User

INVALID_TOKEN_MESSAGE = "Could not validate credentials"


async def get_current_user(
    token: str = Depends(oauth2_scheme), uow: UnitOfWork = Depends(get_uow)
) -> User:
    user = await uow.auth_service.get_user_for_token(token)
    if user is None:
        raise build_http_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="unauthorized",
            message=INVALID_TOKEN_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
