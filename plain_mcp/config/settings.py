"""
Settings loading for plain-mcp.

Settings are read from the process environment once per process:

    PLAIN_API_KEY         required
    PLAIN_API_URL         optional, defaults to Plain's hosted endpoint
    PLAIN_MCP_LOG_LEVEL   optional, defaults to INFO
"""

from __future__ import annotations

import os
from functools import lru_cache

from plain_mcp.config.schemas import AppSettings, ConfigurationError
from plain_mcp.integrations.plain import DEFAULT_API_URL

API_KEY_ENV = "PLAIN_API_KEY"
API_URL_ENV = "PLAIN_API_URL"
LOG_LEVEL_ENV = "PLAIN_MCP_LOG_LEVEL"


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings from environment.

    Uses lru_cache for singleton pattern.

    Raises:
        ConfigurationError: If PLAIN_API_KEY is missing or empty
    """
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} environment variable is required")

    return AppSettings(
        plain_api_key=api_key,
        plain_api_url=os.getenv(API_URL_ENV) or DEFAULT_API_URL,
        log_level=os.getenv(LOG_LEVEL_ENV, "INFO"),
    )
