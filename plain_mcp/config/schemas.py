"""
Configuration Schemas for plain-mcp.

Security:
    The API key uses SecretStr to prevent accidental logging of
    credentials. Access the value with `.get_secret_value()`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from plain_mcp.integrations.plain import DEFAULT_API_URL


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""

    pass


class AppSettings(BaseModel):
    """
    Application settings model.

    Used for type-safe settings access.

    Security:
        The Plain API key is a SecretStr.
        Access it with: settings.plain_api_key.get_secret_value()
    """

    model_config = ConfigDict(frozen=True)

    service_name: str = "plain-mcp"

    # Plain
    plain_api_key: SecretStr = Field(..., description="Plain API key")
    plain_api_url: str = Field(default=DEFAULT_API_URL, description="Plain GraphQL endpoint")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"
