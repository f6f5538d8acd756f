"""
Result envelope for Plain API calls.

Every remote call returns a PlainResult: either a success payload or a
typed PlainError, never both. Success is an explicit flag so that a
legitimately empty payload (e.g. customerByEmail returning null) is never
confused with a failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Code used when the failure happened before Plain produced an error envelope.
TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class FieldError:
    """A per-field validation message reported by Plain."""

    field: str
    message: str
    type: str | None = None


@dataclass(frozen=True, slots=True)
class PlainError:
    """
    Error reported by Plain or by the transport.

    Attributes:
        message: Human-readable message from the remote side
        code: Machine-readable code (e.g. "input_validation", "forbidden")
        type: Plain's MutationErrorType (VALIDATION, FORBIDDEN, INTERNAL, ...)
        fields: Per-field validation details, possibly empty
    """

    message: str
    code: str | None = None
    type: str | None = None
    fields: tuple[FieldError, ...] = ()

    @classmethod
    def from_payload(cls, error: dict[str, Any]) -> PlainError:
        """Build from a mutation payload's `error` object."""
        fields = tuple(
            FieldError(
                field=str(f.get("field", "")),
                message=str(f.get("message", "")),
                type=f.get("type"),
            )
            for f in error.get("fields") or []
        )
        return cls(
            message=error.get("message") or "Unknown error",
            code=error.get("code"),
            type=error.get("type"),
            fields=fields,
        )

    @classmethod
    def from_graphql_errors(cls, errors: list[dict[str, Any]]) -> PlainError:
        """Build from the top-level GraphQL `errors` list."""
        first = errors[0] if errors else {}
        extensions = first.get("extensions") or {}
        message = "; ".join(e.get("message", "") for e in errors if e.get("message"))
        return cls(
            message=message or "Unknown GraphQL error",
            code=extensions.get("code"),
        )

    def describe(self) -> str:
        """Join the message and any field errors into one readable string."""
        if not self.fields:
            return self.message
        details = "; ".join(f"{f.field}: {f.message}" for f in self.fields)
        return f"{self.message} ({details})"


@dataclass(frozen=True, slots=True)
class PlainResult(Generic[T]):
    """Outcome of a single Plain API call."""

    success: bool
    data: T | None = None
    error: PlainError | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("A successful PlainResult cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("A failed PlainResult must carry an error")

    @classmethod
    def ok(cls, data: T) -> PlainResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: PlainError) -> PlainResult[T]:
        """Create a failed result."""
        return cls(success=False, error=error)
