"""
MCP server entry point for plain-mcp.

Binds the Plain tool registry to the MCP stdio transport:
- list_tools: every registered tool with its JSON Schema and annotations
- call_tool: dispatch through the registry; error results set isError

stdout carries the protocol, so all logging goes to stderr.

Usage:
    PLAIN_API_KEY=plainApiKey_xxx plain-mcp
    PLAIN_API_KEY=plainApiKey_xxx python -m plain_mcp
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from plain_mcp import __version__
from plain_mcp.config import AppSettings, ConfigurationError, get_settings
from plain_mcp.integrations.plain import PlainClient, PlainConfig
from plain_mcp.tools import Tool, ToolRegistry
from plain_mcp.tools.plain import create_plain_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "plain-mcp"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ToolCallError(Exception):
    """Carries an error ToolResult's text back to the MCP layer."""

    pass


def to_mcp_tool(tool: Tool) -> types.Tool:
    """Describe a registered tool in MCP terms."""
    return types.Tool.model_validate(tool.to_mcp_schema())


def create_server(registry: ToolRegistry) -> Server:
    """
    Create the MCP server for a registry.

    Arguments are validated by each tool's own input model, so the
    transport-level schema check is disabled.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool) for tool in registry.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> tuple[list[types.TextContent], dict[str, Any] | None]:
        result = await registry.dispatch(name, arguments)
        if result.is_error:
            # The low-level server turns a raised exception into isError=True
            raise ToolCallError(result.text)
        content = [
            types.TextContent(type="text", text=block.text_content or "")
            for block in result.content
        ]
        return content, result.structured_content

    return server


async def run(settings: AppSettings) -> None:
    """Serve the Plain tool catalog over stdio until the host disconnects."""
    config = PlainConfig(
        api_key=settings.plain_api_key.get_secret_value(),
        base_url=settings.plain_api_url,
    )

    async with PlainClient(config) as client:
        registry = create_plain_registry(client)
        server = create_server(registry)

        logger.info(f"[plain_mcp] Serving {len(registry)} tools over stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    logger.info("[plain_mcp] Shutdown complete")


def main() -> None:
    """Console entry point."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    logger.info(f"[plain_mcp] Starting {SERVER_NAME} {__version__} against {settings.plain_api_url}")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("[plain_mcp] Interrupted")


if __name__ == "__main__":
    main()
