"""
Plain API Client for plain-mcp.

This client provides async access to Plain's GraphQL API. It handles
authentication, executes prebuilt documents and unwraps Plain's
result-or-error envelopes into a PlainResult.

Usage:
    async with PlainClient(PlainConfig(api_key="plainApiKey_xxx")) as client:
        result = await client.get_threads(ThreadStatus.TODO, first=25)
        if result.success:
            for thread in result.data:
                print(thread.id, thread.display_title)
        else:
            print(result.error.describe())

API Reference:
    https://www.plain.com/docs/graphql/introduction
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as SchemaValidationError

from plain_mcp.integrations.base import IntegrationClient, IntegrationConfig, IntegrationError
from plain_mcp.integrations.plain import queries
from plain_mcp.integrations.plain.reshape import flatten_edges
from plain_mcp.integrations.plain.result import (
    TRANSPORT_ERROR,
    PlainError,
    PlainResult,
)
from plain_mcp.integrations.plain.schemas import Customer, Thread, ThreadStatus

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://core-api.uk.plain.com/graphql/v1"


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class PlainConfig(IntegrationConfig):
    """Configuration for Plain client."""

    # Required
    api_key: str = ""

    # Optional - defaults to Plain's hosted API
    base_url: str = DEFAULT_API_URL

    def __post_init__(self):
        """Validate configuration."""
        if not self.api_key:
            raise ValueError("Plain API key is required")


# =============================================================================
# Client
# =============================================================================


class PlainClient(IntegrationClient):
    """
    Async client for the Plain GraphQL API.

    Provides:
    - execute(): run any prebuilt query/mutation and unwrap its envelope
    - Typed helpers for threads, customers and timeline entries

    Every method returns a PlainResult and never raises for remote or
    transport failures. There is no retry: one call, one round trip.
    """

    def __init__(self, config: PlainConfig, **kwargs):
        """
        Initialize Plain client.

        Args:
            config: Plain configuration with API key
        """
        super().__init__(config, **kwargs)
        self._config: PlainConfig = config

    @property
    def name(self) -> str:
        """Integration name."""
        return "plain"

    def _get_auth_headers(self) -> dict[str, str]:
        """Return Plain authentication headers."""
        return {"Authorization": f"Bearer {self._config.api_key}"}

    # =========================================================================
    # GraphQL execution
    # =========================================================================

    async def execute(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
        *,
        root: str,
    ) -> PlainResult[Any]:
        """
        Execute a GraphQL document and unwrap the root field.

        Args:
            document: Complete GraphQL document (fragments included)
            variables: Operation variables
            root: Name of the root field whose value is the payload

        Returns:
            PlainResult with the root field's value, or a PlainError if the
            transport failed, GraphQL reported errors, or the mutation
            payload carried an `error`.
        """
        try:
            response = await self._request(
                "POST",
                self._config.base_url,
                json={"query": document, "variables": variables or {}},
            )
            body = response.json()
        except IntegrationError as e:
            logger.warning(f"[plain] {root} failed: {e}")
            return PlainResult.fail(
                PlainError(message=e.message, code=TRANSPORT_ERROR)
            )
        except ValueError as e:
            logger.warning(f"[plain] {root} returned a non-JSON body: {e}")
            return PlainResult.fail(
                PlainError(message=f"Invalid response from Plain: {e}", code=TRANSPORT_ERROR)
            )

        errors = body.get("errors")
        if errors:
            error = PlainError.from_graphql_errors(errors)
            logger.warning(f"[plain] {root} returned GraphQL errors: {error.describe()}")
            return PlainResult.fail(error)

        payload = (body.get("data") or {}).get(root)

        if isinstance(payload, dict) and payload.get("error") is not None:
            error = PlainError.from_payload(payload["error"])
            logger.warning(f"[plain] {root} rejected: {error.describe()}")
            return PlainResult.fail(error)

        return PlainResult.ok(payload)

    # =========================================================================
    # Threads
    # =========================================================================

    async def get_threads(
        self,
        status: ThreadStatus = ThreadStatus.TODO,
        *,
        first: int = 25,
        priority: int | None = None,
    ) -> PlainResult[list[Thread]]:
        """
        List threads with a single status.

        Args:
            status: Thread status to filter on
            first: Page size (only the first page is fetched)
            priority: Optional priority ordinal filter

        Returns:
            PlainResult with the threads in the order Plain returned them
        """
        filters: dict[str, Any] = {"statuses": [status.value]}
        if priority is not None:
            filters["priorities"] = [priority]

        result = await self.execute(
            queries.THREADS,
            {"filters": filters, "first": first},
            root="threads",
        )
        if not result.success:
            return result

        return self._parse(lambda: [Thread(**node) for node in flatten_edges(result.data)])

    async def get_thread(self, thread_id: str) -> PlainResult[Thread | None]:
        """Get a single thread, or None if it does not exist."""
        result = await self.execute(queries.THREAD, {"threadId": thread_id}, root="thread")
        if not result.success or result.data is None:
            return result

        return self._parse(lambda: Thread(**result.data))

    # =========================================================================
    # Customers
    # =========================================================================

    async def get_customer_by_id(self, customer_id: str) -> PlainResult[Customer | None]:
        """Get a customer by Plain ID, or None if it does not exist."""
        result = await self.execute(
            queries.CUSTOMER, {"customerId": customer_id}, root="customer"
        )
        if not result.success or result.data is None:
            return result

        return self._parse(lambda: Customer(**result.data))

    async def get_customer_by_email(self, email: str) -> PlainResult[Customer | None]:
        """Get a customer by email, or None if there is no match."""
        result = await self.execute(
            queries.CUSTOMER_BY_EMAIL, {"email": email}, root="customerByEmail"
        )
        if not result.success or result.data is None:
            return result

        return self._parse(lambda: Customer(**result.data))

    # =========================================================================
    # Timeline
    # =========================================================================

    async def get_timeline_entries(
        self,
        customer_id: str,
        *,
        first: int = 50,
    ) -> PlainResult[dict[str, Any]]:
        """
        Fetch one page of a customer's timeline.

        Returns:
            PlainResult with the raw `timelineEntries` connection
        """
        return await self.execute(
            queries.TIMELINE_ENTRIES,
            {"customerId": customer_id, "first": first},
            root="timelineEntries",
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _parse(build) -> PlainResult[Any]:
        """Run a schema constructor, mapping schema drift to a PlainError."""
        try:
            return PlainResult.ok(build())
        except SchemaValidationError as e:
            logger.warning(f"[plain] Unexpected response shape: {e}")
            return PlainResult.fail(
                PlainError(message=f"Unexpected response shape from Plain: {e}")
            )
