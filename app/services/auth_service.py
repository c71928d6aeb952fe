"""Auth service layer - credential checks and user lookup."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import password_exceeds_bcrypt_limit, token_subject, verify_password
from app.db.models.user import User

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base error for authentication-related failures."""

    def __init__(self, message: str, error_code: str) -> None:
        super().__init__(message)
        self.error_code = error_code


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid."""

    def __init__(self, message: str = "Incorrect email or password") -> None:
        super().__init__(message, "invalid_credentials")


class PasswordTooLongError(AuthenticationError):
    """Raised when password exceeds the maximum allowed length (72 bytes)."""

    def __init__(
        self, message: str = "Password must not exceed 72 bytes when UTF-8 encoded"
    ) -> None:
        super().__init__(message, "password_too_long")


class AuthService:
    """Session-scoped user lookup and credential verification."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user_by_id(self, user_id: int) -> User | None:
        result = await self._session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self._session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user_for_token(self, token: str) -> User | None:
        """Resolve a bearer token to its user.

        Returns None for tokens that fail verification, carry no numeric
        `sub` claim, or point at a user that no longer exists.
        """
        user_id = token_subject(token)
        if user_id is None:
            return None
        return await self.get_user_by_id(user_id)

    async def authenticate_user(self, email: str, password: str) -> User:
        """Authenticate a user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            The authenticated User object

        Raises:
            PasswordTooLongError: If password exceeds 72 bytes when UTF-8 encoded
            InvalidCredentialsError: If email or password is incorrect
        """
        if password_exceeds_bcrypt_limit(password):
            raise PasswordTooLongError()

        user = await self.get_user_by_email(email)
        if user is None:
            logger.info("Login rejected: unknown email")
            raise InvalidCredentialsError()

        if not verify_password(password, user.hashed_password):
            logger.info("Login rejected: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        return user


def auth_service_factory_provider() -> Callable[[AsyncSession], AuthService]:
    """Return the factory the unit of work uses to build a session-scoped AuthService."""
    return AuthService
