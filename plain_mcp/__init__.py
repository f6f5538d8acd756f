"""
plain-mcp: Plain customer-support tools for MCP hosts.

Exposes the Plain GraphQL API to an AI assistant as a catalog of MCP
tools served over stdio.

Layers:
    integrations  HTTP + GraphQL client, result envelope, timeline
    tools         Tool / ToolResult abstractions, registry, Plain catalog
    server        MCP stdio binding and process entry point
"""

__version__ = "1.0.0"
