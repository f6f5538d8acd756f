"""
Integrations for plain-mcp.

The base module holds the transport-level client and its exceptions;
each remote system lives in its own subpackage.
"""

from plain_mcp.integrations.base import (
    AuthenticationError,
    IntegrationClient,
    IntegrationConfig,
    IntegrationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "NotFoundError",
    "RateLimitError",
    "ValidationError",
]
