"""
Response reshaping for Plain payloads.

Plain returns Relay-style connections and DateTime objects. Tools hand
results to an LLM, so both are collapsed into flat JSON:

    {"edges": [{"node": {...}}, ...]}     ->  [{...}, ...]
    {"iso8601": "2024-01-01T00:00:00Z"}   ->  "2024-01-01T00:00:00Z"
"""

from __future__ import annotations

from typing import Any


def flatten_edges(connection: dict[str, Any] | None) -> list[Any]:
    """Unwrap one level of `edges`/`node` into an ordered list of nodes."""
    if not connection:
        return []
    return [edge.get("node") for edge in connection.get("edges") or [] if edge]


def has_next_page(connection: dict[str, Any] | None) -> bool:
    """Whether the connection reports more results beyond this page."""
    if not connection:
        return False
    page_info = connection.get("pageInfo") or {}
    return bool(page_info.get("hasNextPage"))


def _is_connection(value: dict[str, Any]) -> bool:
    return "edges" in value and set(value) <= {"edges", "pageInfo", "totalCount"}


def _is_timestamp(value: dict[str, Any]) -> bool:
    return set(value) == {"iso8601"} or set(value) == {"iso8601", "unixTimestamp"}


def simplify(value: Any) -> Any:
    """
    Recursively collapse connections and timestamps.

    Other values are returned unchanged (dicts and lists are copied).
    """
    if isinstance(value, list):
        return [simplify(item) for item in value]

    if isinstance(value, dict):
        if _is_connection(value):
            return [simplify(node) for node in flatten_edges(value)]
        if _is_timestamp(value):
            return value["iso8601"]
        return {key: simplify(item) for key, item in value.items()}

    return value
