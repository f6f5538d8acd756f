"""
Plain Tool Factory.

Builds the full Plain tool catalog around one shared PlainClient.

Usage:
    client = PlainClient(PlainConfig(api_key=settings.plain_api_key.get_secret_value()))
    registry = create_plain_registry(client)

    result = await registry.dispatch("get_queue_stats", {})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from plain_mcp.tools.plain.base import PlainOperation, PlainOperationTool
from plain_mcp.tools.plain.companies import COMPANY_OPERATIONS, TENANT_OPERATIONS
from plain_mcp.tools.plain.customer_groups import CUSTOMER_GROUP_OPERATIONS
from plain_mcp.tools.plain.customers import CUSTOMER_OPERATIONS, CUSTOMER_TOOLS
from plain_mcp.tools.plain.labels import LABEL_OPERATIONS
from plain_mcp.tools.plain.messaging import MESSAGING_OPERATIONS
from plain_mcp.tools.plain.threads import THREAD_OPERATIONS, THREAD_TOOLS
from plain_mcp.tools.plain.workspace import WORKSPACE_OPERATIONS
from plain_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from plain_mcp.integrations.plain import PlainClient
    from plain_mcp.tools.base import Tool

logger = logging.getLogger(__name__)

ALL_OPERATIONS: tuple[PlainOperation, ...] = (
    *THREAD_OPERATIONS,
    *CUSTOMER_OPERATIONS,
    *CUSTOMER_GROUP_OPERATIONS,
    *COMPANY_OPERATIONS,
    *TENANT_OPERATIONS,
    *LABEL_OPERATIONS,
    *MESSAGING_OPERATIONS,
    *WORKSPACE_OPERATIONS,
)

CUSTOM_TOOLS = (*THREAD_TOOLS, *CUSTOMER_TOOLS)


def build_plain_tools(client: PlainClient) -> list[Tool]:
    """
    Build every Plain tool for the given client.

    Hand-written tools come first, in the order the catalog documents
    them, followed by the declarative operations.
    """
    tools: list[Tool] = [tool_cls(client=client) for tool_cls in CUSTOM_TOOLS]
    tools.extend(PlainOperationTool(op, client=client) for op in ALL_OPERATIONS)
    return tools


def create_plain_registry(client: PlainClient) -> ToolRegistry:
    """Create a registry holding the full Plain tool catalog."""
    registry = ToolRegistry()
    registry.register_all(build_plain_tools(client))
    logger.info(f"[plain_factory] Plain catalog ready with {len(registry)} tools")
    return registry
