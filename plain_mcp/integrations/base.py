"""
Base classes for plain-mcp integrations.

This module defines the foundational abstractions for the remote API
client, so that transport concerns stay out of the tool layer.

Design Principles:
1. Async-first: All I/O operations are async
2. Type-safe: Pydantic models for all data
3. One attempt: No retries, no backoff, no rate limiting
4. Testable: Easy to mock and test

Error Mapping:
    - 401/403 -> AuthenticationError
    - 404     -> NotFoundError
    - 400/422 -> ValidationError
    - 429     -> RateLimitError (reported, never retried)
    - timeouts, network errors, other statuses -> IntegrationError
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class IntegrationError(Exception):
    """Base exception for integration errors."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        parts = [f"[{self.integration}] {self.args[0]}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class AuthenticationError(IntegrationError):
    """Raised when authentication fails (401/403)."""


class RateLimitError(IntegrationError):
    """Raised when the remote API reports rate limiting (429)."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, integration, **kwargs)
        self.retry_after = retry_after


class NotFoundError(IntegrationError):
    """Raised when a resource is not found (404)."""


class ValidationError(IntegrationError):
    """Raised when request validation fails (400/422)."""


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Configuration for an integration client."""

    # Connection
    base_url: str = ""
    timeout: float = 30.0


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides common functionality:
    - HTTP client management
    - Authentication header injection
    - Error handling and mapping
    - Request/response logging

    Subclasses must implement:
    - name: Integration identifier
    - _get_auth_headers(): Return authentication headers
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    @abstractmethod
    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        ...

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Execute a single HTTP request.

        Args:
            method: HTTP method
            path: URL, absolute or relative to base_url
            json: JSON body

        Returns:
            httpx.Response

        Raises:
            IntegrationError: On timeout, network failure or error status
        """
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=path,
                json=json,
            )
        except httpx.TimeoutException as e:
            raise IntegrationError(f"Request timeout: {e}", self.name) from e
        except httpx.NetworkError as e:
            raise IntegrationError(f"Network error: {e}", self.name) from e

        logger.debug(f"[{self.name}] {method} {path} -> {response.status_code}")

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Args:
            response: HTTP response to check

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            IntegrationError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        body = response.text

        if status == 401 or status == 403:
            raise AuthenticationError(
                f"Authentication failed: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Rate limit exceeded",
                self.name,
                status_code=status,
                response_body=body,
                retry_after=float(retry_after) if retry_after else None,
            )

        if status == 404:
            raise NotFoundError(
                f"Resource not found: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        if status == 400 or status == 422:
            raise ValidationError(
                f"Validation error: {body}",
                self.name,
                status_code=status,
                response_body=body,
            )

        raise IntegrationError(
            f"Request failed: {body}",
            self.name,
            status_code=status,
            response_body=body,
        )

    async def __aenter__(self) -> "IntegrationClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
