"""
Plain Integration for plain-mcp.

Plain is a customer-support platform with a GraphQL API. This integration
provides:
- GraphQL execution with uniform result-or-error unwrapping
- Typed thread and customer schemas
- Timeline reconstruction for a single thread

Usage:
    from plain_mcp.integrations.plain import PlainClient, PlainConfig

    client = PlainClient(PlainConfig(api_key="plainApiKey_xxx"))

    result = await client.get_customer_by_email("jane@example.com")
    if result.success and result.data:
        print(result.data.display_name)

API Reference:
    https://www.plain.com/docs/graphql/introduction
"""

from plain_mcp.integrations.plain.client import DEFAULT_API_URL, PlainClient, PlainConfig
from plain_mcp.integrations.plain.result import FieldError, PlainError, PlainResult
from plain_mcp.integrations.plain.schemas import (
    Customer,
    SnoozeMode,
    Thread,
    ThreadPriority,
    ThreadStatus,
    ThreadStatusFilter,
    priority_name,
)
from plain_mcp.integrations.plain.timeline import Timeline, TimelineItem, fetch_thread_timeline

__all__ = [
    "DEFAULT_API_URL",
    "Customer",
    "FieldError",
    "PlainClient",
    "PlainConfig",
    "PlainError",
    "PlainResult",
    "SnoozeMode",
    "Thread",
    "ThreadPriority",
    "ThreadStatus",
    "ThreadStatusFilter",
    "Timeline",
    "TimelineItem",
    "fetch_thread_timeline",
    "priority_name",
]
