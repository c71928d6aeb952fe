"""Settings errors, importable without triggering settings validation."""

from __future__ import annotations


class MissingRequiredSettingsError(Exception):
    """Raised when required settings are missing."""

    def __init__(self, missing_fields: list[str]) -> None:
        """Initialize with list of missing field names."""
        self.missing_fields = missing_fields
        super().__init__(f"Missing required environment variables: {', '.join(missing_fields)}")


class InvalidSettingsError(Exception):
    """Raised when settings are invalid."""

    def __init__(self, invalid_fields: list[tuple[str, str]]) -> None:
        """Initialize with list of invalid field names and messages."""
        self.invalid_fields = invalid_fields
        summary = ", ".join(f"{field}: {message}" for field, message in invalid_fields)
        super().__init__(f"Invalid environment variables: {summary}")
