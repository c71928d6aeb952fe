"""OpenAI integration placeholder.

Only reports whether the integration is configured. Nothing here issues a request
to OpenAI; `client()` hands out an SDK client for future use.
"""

from __future__ import annotations

import logging

from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from app.core.config import DEFAULT_OPENAI_BASE_URL

logger = logging.getLogger(__name__)

SERVICE_NAME = "OpenAI"
PLACEHOLDER_MESSAGE = "OpenAI service placeholder - implement your OpenAI integration here"


class OpenAINotConfiguredError(Exception):
    """Raised when an OpenAI client is requested without an API key."""

    error_code: str = "openai_not_configured"

    def __init__(self, message: str = "OpenAI API key is not configured") -> None:
        super().__init__(message)


class OpenAIStatus(BaseModel):
    """Configuration summary of the OpenAI integration."""

    service: str = Field(SERVICE_NAME, description="Integration name")
    configured: bool = Field(..., description="Whether the integration can be used")
    base_url: str = Field(..., description="API base URL")
    has_api_key: bool = Field(..., description="Whether an API key is present")


class OpenAIPlaceholder(BaseModel):
    """Payload returned by the placeholder operation."""

    message: str = PLACEHOLDER_MESSAGE
    status: str = "placeholder"
    api_key_configured: bool


class OpenAIService:
    """Holds the OpenAI configuration loaded at startup."""

    def __init__(self, api_key: str | None, base_url: str = DEFAULT_OPENAI_BASE_URL) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client: AsyncOpenAI | None = None

    def is_configured(self) -> bool:
        """True when an API key is present. Any non-empty string counts, whitespace included."""
        return bool(self._api_key)

    def get_status(self) -> OpenAIStatus:
        return OpenAIStatus(
            configured=self.is_configured(),
            base_url=self._base_url,
            has_api_key=self.is_configured(),
        )

    def placeholder(self) -> OpenAIPlaceholder:
        return OpenAIPlaceholder(api_key_configured=self.is_configured())

    def client(self) -> AsyncOpenAI:
        """Return the SDK client bound to this configuration.

        Building the client does not contact the API.

        Raises:
            OpenAINotConfiguredError: If no API key is configured.
        """
        if not self.is_configured():
            raise OpenAINotConfiguredError()
        if self._client is None:
            logger.debug("Creating OpenAI client", extra={"base_url": self._base_url})
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client


def openai_service_provider(api_key: str | None, base_url: str) -> OpenAIService:
    """Build the process-wide OpenAI service from explicit configuration."""
    return OpenAIService(api_key=api_key, base_url=base_url)
