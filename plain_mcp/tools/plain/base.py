"""
Plain tool base classes.

Every Plain tool follows the same pipeline:

    arguments -> pydantic input model -> GraphQL variables
              -> PlainClient.execute() -> PlainResult
              -> ToolResult (simplified JSON, or the PlainError text)

PlainTool implements the validation and error boundary. Most tools are
declared as data: a PlainOperation names the document, the root field,
the input model and how to build variables, and PlainOperationTool turns
it into a Tool. Tools that need more than one round trip (list_threads,
get_thread, get_queue_stats) subclass PlainTool directly.

Usage:
    op = PlainOperation(
        name="get_company",
        description="Get a company by ID",
        document=queries.COMPANY,
        root="company",
        input_model=CompanyIdInput,
        variables=lambda p: {"companyId": p.company_id},
        read_only=True,
    )
    tool = PlainOperationTool(op, client=plain_client)
    result = await tool.execute({"company_id": "co_01"})
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plain_mcp.integrations.plain.reshape import simplify
from plain_mcp.tools.base import Tool, ToolAnnotations, ToolResult

if TYPE_CHECKING:
    from plain_mcp.integrations.plain import PlainClient, PlainResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 25
MAX_LIMIT = 100

# pydantic prefixes messages of ValueErrors raised inside validators
VALUE_ERROR_PREFIX = "Value error, "


# =============================================================================
# Input models
# =============================================================================


class ToolInput(BaseModel):
    """Base for tool argument models: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class NoInput(ToolInput):
    """Tools that take no arguments."""


def limit_field(default: int = DEFAULT_LIMIT) -> Any:
    """Page size argument, 1-100."""
    return Field(
        default,
        ge=1,
        le=MAX_LIMIT,
        description=f"Number of results to return (1-{MAX_LIMIT})",
    )


def exactly_one(model: BaseModel, *fields: str) -> None:
    """
    Require exactly one of `fields` to be set on `model`.

    Raises:
        ValueError: If none or more than one is set
    """
    provided = [name for name in fields if getattr(model, name) is not None]
    if len(provided) != 1:
        raise ValueError(f"Provide exactly one of: {', '.join(fields)}")


def compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


def format_validation_error(error: ValidationError) -> str:
    """
    Render pydantic errors as `field: message; ...`.

    Errors raised by model validators have no field and are shown as the
    bare message.
    """
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value").removeprefix(VALUE_ERROR_PREFIX)
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


# =============================================================================
# Tool base
# =============================================================================


class PlainTool(Tool):
    """
    Base class for tools backed by the Plain API.

    Subclasses set the class attributes and implement run(). Argument
    validation happens here, before any remote call. Unexpected
    exceptions from run() are logged and reported as an error result.
    """

    tool_name: ClassVar[str] = ""
    tool_description: ClassVar[str] = ""
    tool_title: ClassVar[str | None] = None
    input_model: ClassVar[type[BaseModel]] = NoInput
    read_only: ClassVar[bool] = False
    destructive: ClassVar[bool] = False
    idempotent: ClassVar[bool] = False

    def __init__(self, *, client: PlainClient):
        """
        Initialize the tool.

        Args:
            client: Plain API client shared by all tools
        """
        self._client = client

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def description(self) -> str:
        return self.tool_description

    @property
    def arguments_model(self) -> type[BaseModel]:
        """Model the call arguments are validated against."""
        return self.input_model

    @property
    def input_schema(self) -> dict[str, Any]:
        return model_input_schema(self.arguments_model)

    @property
    def annotations(self) -> ToolAnnotations:
        return build_annotations(
            title=self.tool_title,
            read_only=self.read_only,
            destructive=self.destructive,
            idempotent=self.idempotent,
        )

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            params = self.arguments_model.model_validate(arguments or {})
        except ValidationError as e:
            logger.info(f"[{self.name}] Rejected arguments: {e.error_count()} error(s)")
            return ToolResult.error(f"Invalid arguments: {format_validation_error(e)}")

        try:
            return await self.run(params)
        except Exception as e:
            logger.error(f"[{self.name}] Unexpected error: {e}", exc_info=True)
            return ToolResult.error(f"{self.name} failed: {e}")

    @abstractmethod
    async def run(self, params: Any) -> ToolResult:
        """Perform the call with validated arguments."""
        ...


def model_input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON Schema for a tool input model, shaped for tool listings."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    schema.setdefault("properties", {})
    return schema


def build_annotations(
    *,
    title: str | None,
    read_only: bool,
    destructive: bool,
    idempotent: bool,
) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        read_only_hint=read_only,
        destructive_hint=destructive and not read_only,
        idempotent_hint=idempotent or read_only,
        open_world_hint=True,
    )


def error_result(result: PlainResult[Any]) -> ToolResult:
    """Surface a failed PlainResult to the caller."""
    return ToolResult.error(result.error.describe())


# =============================================================================
# Declarative operations
# =============================================================================


@dataclass(frozen=True, slots=True)
class PlainOperation:
    """
    A single GraphQL query or mutation exposed as a tool.

    Attributes:
        name: Tool name (snake_case)
        description: Tool description for the assistant
        document: Complete GraphQL document
        root: Root field holding the payload
        input_model: Pydantic model for the tool arguments
        variables: Builds GraphQL variables from validated arguments
        select: Picks the interesting part of the payload (default: all of it)
        not_found: Informational text when the selected payload is null
        done_message: Text for mutations whose payload carries nothing but
            the (null) error
        title: Human-readable title
        read_only: The operation is a query
        destructive: The operation deletes or removes data
        idempotent: Repeating the call has no further effect
    """

    name: str
    description: str
    document: str
    root: str
    input_model: type[BaseModel] = NoInput
    variables: Callable[[Any], dict[str, Any]] | None = None
    select: Callable[[Any], Any] | None = None
    not_found: str | None = None
    done_message: str | None = None
    title: str | None = None
    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False


class PlainOperationTool(PlainTool):
    """
    A Tool generated from a PlainOperation.

    This tool:
    1. Uses the operation's input model for validation and schema
    2. Builds variables and executes the document
    3. Returns the simplified payload as JSON, or the remote error

    Example:
        tool = PlainOperationTool(MARK_THREAD_AS_DONE_OP, client=plain_client)
        result = await tool.execute({"thread_id": "th_01"})
    """

    def __init__(self, operation: PlainOperation, *, client: PlainClient):
        super().__init__(client=client)
        self._operation = operation

    @property
    def operation(self) -> PlainOperation:
        return self._operation

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def description(self) -> str:
        return self._operation.description

    @property
    def arguments_model(self) -> type[BaseModel]:
        return self._operation.input_model

    @property
    def annotations(self) -> ToolAnnotations:
        op = self._operation
        return build_annotations(
            title=op.title,
            read_only=op.read_only,
            destructive=op.destructive,
            idempotent=op.idempotent,
        )

    async def run(self, params: Any) -> ToolResult:
        op = self._operation
        variables = op.variables(params) if op.variables else {}

        if not op.read_only:
            logger.info(f"[{self.name}] Sending {op.root}")

        result = await self._client.execute(op.document, variables, root=op.root)
        if not result.success:
            return error_result(result)

        data = result.data
        if op.select is not None and data is not None:
            data = op.select(data)

        if data is None and op.not_found is not None:
            return ToolResult.success(op.not_found)

        data = simplify(data)
        if isinstance(data, dict):
            data.pop("error", None)
            if not data and not op.read_only:
                return ToolResult.success(op.done_message or f"{op.root} succeeded")

        return ToolResult.json(data)

    def __repr__(self) -> str:
        return f"<PlainOperationTool {self.name} root={self._operation.root}>"


def pick(key: str) -> Callable[[Any], Any]:
    """Selector returning one field of a payload."""

    def select(payload: Any) -> Any:
        return payload.get(key) if isinstance(payload, dict) else payload

    return select
