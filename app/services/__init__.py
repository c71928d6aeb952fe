from app.services.auth_service import (
    AuthenticationError,
    AuthService,
    InvalidCredentialsError,
    PasswordTooLongError,
)
from app.services.openai_service import OpenAINotConfiguredError, OpenAIService

__all__ = [
    "AuthService",
    "AuthenticationError",
    "InvalidCredentialsError",
    "OpenAINotConfiguredError",
    "OpenAIService",
    "PasswordTooLongError",
]
