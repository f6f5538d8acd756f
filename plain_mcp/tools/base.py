"""
Tool Base Classes (MCP-Aligned).

This module defines the core abstractions for tools:
- Tool: Base class for all tools
- ToolResult: Result from tool execution
- ToolAnnotations: Behavioral hints for tools
- ContentBlock: Content blocks in tool results

MCP Alignment:
    This interface follows Model Context Protocol standards:
    - Tool has name, description, input_schema
    - ToolResult has content blocks and is_error flag
    - Annotations are advisory hints only

Usage:
    class MyTool(Tool):
        @property
        def name(self) -> str:
            return "my_tool"

        @property
        def description(self) -> str:
            return "Does something useful"

        @property
        def input_schema(self) -> dict:
            return {
                "type": "object",
                "properties": {
                    "input": {"type": "string"}
                },
                "required": ["input"]
            }

        async def execute(self, arguments: dict) -> ToolResult:
            return ToolResult.success(f"Processed: {arguments['input']}")
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ContentType(Enum):
    """Type of content in a tool result (MCP-aligned)."""

    TEXT = "text"


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """
    Content block in tool result (MCP-aligned).

    Every tool in this project answers with text, usually pretty-printed
    JSON, so only TEXT blocks exist.
    """

    type: ContentType
    text_content: str | None = None

    @classmethod
    def from_text(cls, content: str) -> ContentBlock:
        """Create a text content block."""
        return cls(type=ContentType.TEXT, text_content=content)


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    """
    Behavioral hints for tools (MCP-aligned).

    These are ADVISORY only - they do not enforce behavior and should
    not be relied upon for security decisions.

    Attributes:
        title: Human-readable title for display
        read_only_hint: If True, tool does not modify environment
        destructive_hint: For non-read-only tools, may destroy data
        idempotent_hint: Repeated calls with same args have no additional effect
        open_world_hint: Tool interacts with external entities

    Example:
        # Read-only query tool
        ToolAnnotations(
            title="List Threads",
            read_only_hint=True,
            destructive_hint=False,
            idempotent_hint=True,
            open_world_hint=True,
        )
    """

    title: str | None = None
    read_only_hint: bool = False
    destructive_hint: bool = True  # Default True for write operations
    idempotent_hint: bool = False
    open_world_hint: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {}

        if self.title is not None:
            result["title"] = self.title
        if self.read_only_hint:
            result["readOnlyHint"] = True
        if not self.destructive_hint:
            result["destructiveHint"] = False
        if self.idempotent_hint:
            result["idempotentHint"] = True
        if self.open_world_hint:
            result["openWorldHint"] = True

        return result


@dataclass(frozen=True, slots=True)
class ToolResult:
    """
    Result from tool execution (MCP-aligned).

    Every tool execution returns a ToolResult containing:
    - content: Array of content blocks
    - is_error: Whether the execution failed
    - structured_content: Optional structured data

    Error Handling:
        Tool execution errors should be reported IN the result,
        not as exceptions. The assistant can then reason about
        the error and adjust its next call.

    Example:
        # Success with text
        ToolResult.success("Thread marked as done")

        # Success with JSON
        ToolResult.json({"id": "th_01", "title": "Refund request"})

        # Error
        ToolResult.error("Thread not found")
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False
    structured_content: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        text: str,
        *,
        structured: dict[str, Any] | None = None,
    ) -> ToolResult:
        """
        Create a successful result.

        Args:
            text: Human-readable result text
            structured: Optional structured data for programmatic use

        Returns:
            ToolResult with is_error=False
        """
        return cls(
            content=(ContentBlock.from_text(text),),
            is_error=False,
            structured_content=structured,
        )

    @classmethod
    def json(cls, data: Any) -> ToolResult:
        """Create a successful result whose text is `data` as indented JSON."""
        return cls.success(
            json.dumps(data, indent=2, ensure_ascii=False),
            structured=data if isinstance(data, dict) else None,
        )

    @classmethod
    def error(cls, message: str) -> ToolResult:
        """
        Create an error result.

        Args:
            message: Error description

        Returns:
            ToolResult with is_error=True
        """
        return cls(
            content=(ContentBlock.from_text(f"Error: {message}"),),
            is_error=True,
        )

    @property
    def text(self) -> str:
        """Get the primary text content (convenience accessor)."""
        for block in self.content:
            if block.type == ContentType.TEXT and block.text_content:
                return block.text_content
        return ""


class Tool(ABC):
    """
    Base class for all tools (MCP-aligned).

    Contract:
        - name: Unique identifier (snake_case)
        - description: Clear description for LLM understanding
        - input_schema: JSON Schema for arguments
        - execute: Async method that performs the action

    Tools do NOT know they are called over MCP. They are independent,
    testable units; the server layer adapts them to the protocol.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for the tool.

        Convention: snake_case verb_noun (e.g., "list_threads")
        """
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """
        Human-readable description of what the tool does.

        This is used by the LLM to understand when to use the tool.
        """
        ...

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """
        JSON Schema defining expected input arguments.

        Must be a valid JSON Schema object with:
        - type: "object"
        - properties: dict of parameter definitions
        - required: list of required parameter names (optional)
        """
        ...

    @property
    def annotations(self) -> ToolAnnotations:
        """
        Behavioral hints for the tool.

        Override to provide hints about:
        - read_only_hint: Does not modify environment
        - destructive_hint: May destroy data
        - idempotent_hint: Safe to retry
        - open_world_hint: Calls external services
        """
        return ToolAnnotations()

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """
        Execute the tool with the given arguments.

        Args:
            arguments: Dict matching input_schema

        Returns:
            ToolResult with execution outcome

        Important:
            - Report errors in ToolResult.error(), don't raise exceptions
            - Exceptions should only be raised for unexpected failures
        """
        ...

    def to_mcp_schema(self) -> dict[str, Any]:
        """Convert to full MCP tool schema, including annotations."""
        schema = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

        annotations = self.annotations.to_dict()
        if annotations:
            schema["annotations"] = annotations

        return schema

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"
