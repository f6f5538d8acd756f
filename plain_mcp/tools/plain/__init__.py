"""
Plain Tools for plain-mcp.

These tools wrap Plain API operations for an assistant:
- Threads: list, inspect, assign, snooze, label, reply
- Customers, customer groups, companies and tenants
- Label types, notes, chats and emails
- Workspace, users, tiers and webhook targets

Tools do NOT know they are served over MCP. Errors are returned in
ToolResult, not raised.

Usage:
    from plain_mcp.tools.plain import create_plain_registry

    registry = create_plain_registry(plain_client)
    result = await registry.dispatch("list_threads", {"status": "todo"})
"""

from .base import PlainOperation, PlainOperationTool, PlainTool
from .customers import GetCustomerTimelineTool, SearchCustomersTool
from .factory import ALL_OPERATIONS, build_plain_tools, create_plain_registry
from .threads import GetQueueStatsTool, GetThreadTool, ListThreadsTool

__all__ = [
    "ALL_OPERATIONS",
    "GetCustomerTimelineTool",
    "GetQueueStatsTool",
    "GetThreadTool",
    "ListThreadsTool",
    "PlainOperation",
    "PlainOperationTool",
    "PlainTool",
    "SearchCustomersTool",
    "build_plain_tools",
    "create_plain_registry",
]
