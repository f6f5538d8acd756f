"""
plain-mcp Tools.

Tools wrap Plain API calls into callable units that an assistant can
select and invoke.

Design Principle:
    - Tools are independent, testable units
    - Tools do NOT know they are served over MCP
    - Errors are reported in ToolResult, not raised

MCP Alignment:
    Tool interface follows Model Context Protocol standards.
    See: https://modelcontextprotocol.io/specification/

Usage:
    registry = ToolRegistry()
    registry.register(MyTool())

    result = await registry.dispatch("my_tool", {"arg": "value"})
"""

from .base import (
    ContentBlock,
    ContentType,
    Tool,
    ToolAnnotations,
    ToolResult,
)
from .registry import ToolRegistry, ToolRegistryError

__all__ = [
    "ContentBlock",
    "ContentType",
    "Tool",
    "ToolAnnotations",
    "ToolRegistry",
    "ToolRegistryError",
    "ToolResult",
]
