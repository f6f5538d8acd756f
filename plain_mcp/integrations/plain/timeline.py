"""
Timeline reconstruction for a single thread.

Plain scopes timeline entries to a customer, not a thread. To show a
thread's conversation we fetch one page of the customer's feed, keep the
entries whose `threadId` matches, and flatten each entry's polymorphic
actor ("who") and entry body ("what") into display strings.

Both polymorphic fields are modelled as closed sets of variants keyed on
`__typename`, with an Unknown variant for anything Plain adds later:

    Actor:  UserActor | CustomerActor | SystemActor | MachineUserActor | UnknownActor
    Entry:  ChatEntry | EmailEntry | NoteEntry | CustomEntry | UnknownEntry

Completeness:
    Only the first TIMELINE_PAGE_SIZE entries of the customer's feed are
    inspected. Older activity is not visible. The reconstruction reports
    `truncated=True` when Plain says more entries exist, so callers can
    tell the timeline may be partial.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, ConfigDict, Field

from plain_mcp.integrations.plain.reshape import flatten_edges, has_next_page

if TYPE_CHECKING:
    from plain_mcp.integrations.plain.client import PlainClient

logger = logging.getLogger(__name__)

TIMELINE_PAGE_SIZE = 50

UNKNOWN = "Unknown"


class _Variant(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    typename: str | None = Field(None, alias="__typename")


# =============================================================================
# Actors
# =============================================================================


class _Person(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str | None = Field(None, alias="fullName")
    email: str | None = None


class _CustomerEmail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None


class _CustomerPerson(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str | None = Field(None, alias="fullName")
    email: _CustomerEmail | None = None


class UserActor(_Variant):
    """A support user on the workspace."""

    user: _Person | None = None


class CustomerActor(_Variant):
    """The customer themselves."""

    customer: _CustomerPerson | None = None


class SystemActor(_Variant):
    """Plain's own automation."""

    system_actor_type: str | None = Field(None, alias="systemActorType")


class MachineUserActor(_Variant):
    """An API key / bot identity."""

    machine_user: _Person | None = Field(None, alias="machineUser")


class UnknownActor(_Variant):
    """Absent actor or one this adapter does not recognise."""


Actor = Union[UserActor, CustomerActor, SystemActor, MachineUserActor, UnknownActor]

_ACTOR_TYPES: dict[str, type[_Variant]] = {
    "UserActor": UserActor,
    "CustomerActor": CustomerActor,
    "SystemActor": SystemActor,
    "MachineUserActor": MachineUserActor,
}


def parse_actor(raw: dict[str, Any] | None) -> Actor:
    """Select the actor variant by `__typename`."""
    if not raw:
        return UnknownActor()
    variant = _ACTOR_TYPES.get(raw.get("__typename") or "", UnknownActor)
    return variant.model_validate(raw)


def actor_display_name(actor: Actor) -> str:
    """Resolve an actor to the name shown next to a timeline entry."""
    if isinstance(actor, UserActor):
        user = actor.user
        return (user and (user.full_name or user.email)) or "Support Agent"

    if isinstance(actor, CustomerActor):
        customer = actor.customer
        if customer:
            if customer.full_name:
                return customer.full_name
            if customer.email and customer.email.email:
                return customer.email.email
        return "Customer"

    if isinstance(actor, SystemActor):
        return f"System ({actor.system_actor_type or 'auto'})"

    if isinstance(actor, MachineUserActor):
        machine_user = actor.machine_user
        return (machine_user and machine_user.full_name) or "Bot"

    return UNKNOWN


# =============================================================================
# Entries
# =============================================================================


class ChatEntry(_Variant):
    """A chat message."""

    text: str | None = Field(None, alias="chatText")


class EmailEntry(_Variant):
    """An inbound or outbound email."""

    subject: str | None = None
    text_content: str | None = Field(None, alias="textContent")


class NoteEntry(_Variant):
    """An internal note."""

    text: str | None = Field(None, alias="noteText")


class _Component(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    typename: str | None = Field(None, alias="__typename")
    text: str | None = Field(None, alias="componentText")


class CustomEntry(_Variant):
    """A custom structured event made of UI components."""

    title: str | None = None
    components: list[_Component] | None = None


class UnknownEntry(_Variant):
    """Absent entry or one this adapter does not recognise."""


Entry = Union[ChatEntry, EmailEntry, NoteEntry, CustomEntry, UnknownEntry]

_ENTRY_TYPES: dict[str, type[_Variant]] = {
    "ChatEntry": ChatEntry,
    "EmailEntry": EmailEntry,
    "NoteEntry": NoteEntry,
    "CustomEntry": CustomEntry,
    "CustomTimelineEntry": CustomEntry,
}

# Unaliased spellings of the per-variant text fields
_TEXT_ALIASES = {"ChatEntry": "chatText", "NoteEntry": "noteText"}


def parse_entry(raw: dict[str, Any] | None) -> Entry:
    """Select the entry variant by `__typename`."""
    if not raw:
        return UnknownEntry()

    typename = raw.get("__typename") or ""
    alias = _TEXT_ALIASES.get(typename)
    if alias and alias not in raw and "text" in raw:
        raw = {**raw, alias: raw["text"]}
    if typename in ("CustomEntry", "CustomTimelineEntry"):
        raw = {
            **raw,
            "components": [
                {**c, "componentText": c.get("componentText", c.get("text"))}
                for c in raw.get("components") or []
            ],
        }

    variant = _ENTRY_TYPES.get(typename, UnknownEntry)
    return variant.model_validate(raw)


def entry_content(entry: Entry) -> str:
    """Resolve an entry body to its display text."""
    if isinstance(entry, (ChatEntry, NoteEntry)):
        return entry.text or ""

    if isinstance(entry, EmailEntry):
        return entry.text_content or entry.subject or ""

    if isinstance(entry, CustomEntry):
        texts = [
            c.text or ""
            for c in entry.components or []
            if c.typename == "ComponentText"
        ]
        if texts:
            return "\n".join(texts)
        return entry.title or ""

    return ""


# =============================================================================
# Reconstruction
# =============================================================================


@dataclass(frozen=True, slots=True)
class TimelineItem:
    """One resolved timeline entry."""

    id: str
    timestamp: str | None
    actor: str
    type: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "actor": self.actor,
            "type": self.type,
            "content": self.content,
        }


@dataclass(frozen=True, slots=True)
class Timeline:
    """Resolved entries for one thread, in feed order."""

    thread_id: str | None
    items: tuple[TimelineItem, ...] = ()
    truncated: bool = False

    def to_list(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items]


def _timestamp(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("iso8601")
    return value


def resolve_item(node: dict[str, Any]) -> TimelineItem:
    """Resolve one raw timeline node into a TimelineItem."""
    raw_entry = node.get("entry")
    return TimelineItem(
        id=node.get("id", ""),
        timestamp=_timestamp(node.get("timestamp")),
        actor=actor_display_name(parse_actor(node.get("actor"))),
        type=(raw_entry or {}).get("__typename") or UNKNOWN,
        content=entry_content(parse_entry(raw_entry)),
    )


def reconstruct(
    connection: dict[str, Any] | None,
    thread_id: str | None = None,
    *,
    page_size: int = TIMELINE_PAGE_SIZE,
) -> Timeline:
    """
    Build a thread's timeline from a customer's `timelineEntries` page.

    Args:
        connection: Raw `timelineEntries` connection
        thread_id: Keep only entries for this thread (None keeps all)
        page_size: The page size the connection was fetched with

    Returns:
        Timeline with entries in feed order
    """
    nodes = [node for node in flatten_edges(connection) if node]
    kept = [
        resolve_item(node)
        for node in nodes
        if thread_id is None or node.get("threadId") == thread_id
    ]
    truncated = len(nodes) >= page_size and has_next_page(connection)
    return Timeline(
        thread_id=thread_id,
        items=tuple(kept),
        truncated=truncated,
    )


async def fetch_thread_timeline(
    client: PlainClient,
    customer_id: str,
    thread_id: str | None,
    *,
    page_size: int = TIMELINE_PAGE_SIZE,
) -> Timeline:
    """
    Fetch and reconstruct a timeline.

    Failures degrade to an empty timeline: the timeline is auxiliary to
    the thread it decorates.
    """
    result = await client.get_timeline_entries(customer_id, first=page_size)
    if not result.success:
        logger.warning(
            f"[timeline] Could not fetch timeline for customer {customer_id}: "
            f"{result.error.describe()}"
        )
        return Timeline(thread_id=thread_id)

    timeline = reconstruct(result.data, thread_id, page_size=page_size)
    if timeline.truncated:
        logger.info(
            f"[timeline] Customer {customer_id} has more than {page_size} entries; "
            f"thread {thread_id} timeline may be incomplete"
        )
    return timeline
