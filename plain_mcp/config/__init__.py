"""
plain-mcp Configuration

Environment-driven settings, read once at startup.
"""

from .schemas import AppSettings, ConfigurationError
from .settings import get_settings

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "get_settings",
]
