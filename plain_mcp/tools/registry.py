"""
Tool Registry for plain-mcp.

The registry manages the tools the server exposes:
- Registration with validation
- Lookup by name
- Dispatch of a tool call by name

Tools are registered once at startup and the registry is not modified
while the server is running.

Usage:
    registry = ToolRegistry()
    registry.register(ListThreadsTool(client=plain_client))

    # Get tool by name
    tool = registry.get("list_threads")

    # Call a tool by name
    result = await registry.dispatch("list_threads", {"status": "todo"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from plain_mcp.tools.base import ToolResult

if TYPE_CHECKING:
    from plain_mcp.tools.base import Tool

logger = logging.getLogger(__name__)


class ToolRegistryError(Exception):
    """Error in tool registry operations."""

    pass


class ToolRegistry:
    """
    Registry of available tools.

    Example:
        registry = ToolRegistry()
        registry.register(SearchCustomersTool(client=plain_client))

        result = await registry.dispatch(
            "search_customers", {"email": "jane@example.com"}
        )
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Args:
            tool: Tool instance to register

        Raises:
            ToolRegistryError: If tool name already registered or tool is invalid
        """
        if tool.name in self._tools:
            raise ToolRegistryError(
                f"Tool '{tool.name}' already registered. Use a unique name or unregister first."
            )

        self._validate_tool(tool)

        self._tools[tool.name] = tool
        logger.debug(f"[tool_registry] Registered tool: {tool.name}")

    def register_all(self, tools: list[Tool]) -> None:
        """Register several tools, then log the total once."""
        for tool in tools:
            self.register(tool)
        logger.info(f"[tool_registry] Registered {len(tools)} tools")

    def get(self, name: str) -> Tool | None:
        """
        Get a tool by name.

        Returns:
            Tool instance or None if not found
        """
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools, in registration order."""
        return list(self._tools.values())

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Execute the named tool.

        An unknown name is reported as an error result rather than raised,
        the same way tools report their own failures.

        Args:
            name: Tool name
            arguments: Raw call arguments (None is treated as empty)

        Returns:
            The tool's ToolResult
        """
        tool = self.get(name)
        if tool is None:
            logger.warning(f"[tool_registry] Unknown tool requested: {name}")
            return ToolResult.error(f"Unknown tool: {name}")

        logger.info(f"[tool_registry] Calling tool: {name}")
        return await tool.execute(arguments or {})

    def _validate_tool(self, tool: Tool) -> None:
        """
        Validate tool has required properties.

        Raises:
            ToolRegistryError: If tool is invalid
        """
        if not tool.name or not isinstance(tool.name, str):
            raise ToolRegistryError(f"Tool must have a valid name: {tool}")

        if not tool.description or not isinstance(tool.description, str):
            raise ToolRegistryError(f"Tool '{tool.name}' must have a description")

        schema = tool.input_schema
        if not isinstance(schema, dict):
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must be a dict")

        if schema.get("type") != "object":
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have type: 'object'")

        if "properties" not in schema:
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have 'properties'")

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={len(self._tools)}>"
