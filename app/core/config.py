from __future__ import annotations

import re

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.config_errors import InvalidSettingsError, MissingRequiredSettingsError

__all__ = [
    "InvalidSettingsError",
    "MissingRequiredSettingsError",
    "Settings",
    "settings",
    "validate_settings",
]

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required environment variables
    jwt_secret_key: str = Field(..., description="JWT secret key for token signing (required)")

    # Database: either DATABASE_URL or all POSTGRES_* components
    database_url: str | None = Field(default=None, description="Database connection URL")
    postgres_user: str | None = Field(default=None, description="Postgres user")
    postgres_password: str | None = Field(default=None, description="Postgres password")
    postgres_host: str | None = Field(default=None, description="Postgres host")
    postgres_port: int = Field(default=5432, description="Postgres port")
    postgres_db: str | None = Field(default=None, description="Postgres database name")

    # Rate limit storage: RATE_LIMIT_STORAGE_URL, REDIS_* components, or in-memory
    redis_host: str | None = Field(default=None, description="Redis host")
    redis_port: int = Field(default=6379, description="Redis port")
    redis_db: int = Field(default=0, description="Redis database number")
    rate_limit_storage_url: str | None = Field(default=None, description="Rate limit storage URL")
    rate_limit_enabled: bool = True

    # External integrations
    openai_api_key: str | None = Field(default=None, description="OpenAI API key (optional)")
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL

    # Optional environment variables (defaults provided)
    app_name: str = "byu-590r-monorepo-backend"
    environment: str = "local"
    log_level: str = "INFO"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Seeded test user
    seed_database: bool = False
    seed_user_name: str = "Test User"
    seed_user_email: str = "test@example.com"
    seed_user_password: str = "password"

    @model_validator(mode="after")
    def build_derived_urls(self) -> Settings:
        """Build URLs from components when missing."""
        if self.database_url is None:
            components = {
                "postgres_user": self.postgres_user,
                "postgres_password": self.postgres_password,
                "postgres_host": self.postgres_host,
                "postgres_db": self.postgres_db,
            }
            missing = [name for name, value in components.items() if not value]
            if missing:
                raise ValueError(
                    "Set DATABASE_URL or all of: "
                    + ", ".join(name.upper() for name in missing)
                )
            self.database_url = (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        if self.rate_limit_storage_url is None:
            if self.redis_host:
                self.rate_limit_storage_url = (
                    f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"
                )
            else:
                self.rate_limit_storage_url = "memory://"
        return self

    @staticmethod
    def _is_strong_jwt_secret(secret: str) -> bool:
        if len(secret) < 32:
            return False
        has_lower = re.search(r"[a-z]", secret) is not None
        has_upper = re.search(r"[A-Z]", secret) is not None
        has_digit = re.search(r"\d", secret) is not None
        has_symbol = re.search(r"[^\w\s]", secret) is not None
        return has_lower and has_upper and has_digit and has_symbol

    @model_validator(mode="after")
    def validate_jwt_secret_strength(self) -> Settings:
        if self.environment == "test":
            return self
        if not self._is_strong_jwt_secret(self.jwt_secret_key):
            raise ValueError(
                "JWT secret key must be at least 32 characters and include upper, lower, "
                "number, and symbol characters."
            )
        return self


def validate_settings() -> Settings:
    """Validate settings and raise exception for missing required fields.

    Raises:
        MissingRequiredSettingsError: If required environment variables are missing
        InvalidSettingsError: If environment variables hold invalid values
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        missing_fields: list[str] = []
        for error in e.errors():
            if error["type"] == "missing":
                field_name = error["loc"][0] if error["loc"] else "unknown"
                missing_fields.append(str(field_name).upper())

        if missing_fields:
            raise MissingRequiredSettingsError(missing_fields) from e

        invalid_fields: list[tuple[str, str]] = []
        for error in e.errors():
            field_path = ".".join(str(part) for part in error.get("loc", []))
            message = error.get("msg", "Invalid value")
            invalid_fields.append((field_path or "settings", message))

        if invalid_fields:
            raise InvalidSettingsError(invalid_fields) from e

        raise


# Validate settings at import time.
# Exceptions will propagate to the importing module (e.g., app/main.py)
settings = validate_settings()
