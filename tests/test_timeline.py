"""
Tests for timeline reconstruction.

Tests cover:
- Actor variants and their fallbacks
- Entry variants and their content
- Filtering a customer feed down to one thread, in feed order
- Truncation flag
- Degradation to an empty timeline on fetch failure
- The timeline document selecting every field the resolvers read
"""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import connection
from plain_mcp.integrations.plain import queries
from plain_mcp.integrations.plain.result import PlainError, PlainResult
from plain_mcp.integrations.plain.timeline import (
    UNKNOWN,
    ChatEntry,
    CustomEntry,
    CustomerActor,
    EmailEntry,
    MachineUserActor,
    NoteEntry,
    SystemActor,
    UserActor,
    actor_display_name,
    entry_content,
    fetch_thread_timeline,
    parse_actor,
    parse_entry,
    reconstruct,
)


def node(entry_id, thread_id, *, actor=None, entry=None):
    return {
        "id": entry_id,
        "threadId": thread_id,
        "timestamp": {"iso8601": f"2024-05-01T10:00:0{entry_id[-1]}Z"},
        "actor": actor,
        "entry": entry,
    }


CHAT = {"__typename": "ChatEntry", "chatText": "Hi, I need help"}


# =============================================================================
# Actor Tests
# =============================================================================


class TestActorDisplayName:
    """Tests for actor resolution."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ({"__typename": "UserActor", "user": {"fullName": "Sam Agent", "email": "sam@co"}}, "Sam Agent"),
            ({"__typename": "UserActor", "user": {"fullName": None, "email": "sam@co"}}, "sam@co"),
            ({"__typename": "UserActor", "user": None}, "Support Agent"),
            ({"__typename": "CustomerActor", "customer": {"fullName": "Jane"}}, "Jane"),
            (
                {"__typename": "CustomerActor", "customer": {"fullName": "", "email": {"email": "j@x.com"}}},
                "j@x.com",
            ),
            ({"__typename": "CustomerActor", "customer": {}}, "Customer"),
            ({"__typename": "SystemActor", "systemActorType": "WORKFLOW"}, "System (WORKFLOW)"),
            ({"__typename": "SystemActor"}, "System (auto)"),
            ({"__typename": "MachineUserActor", "machineUser": {"fullName": "Triage Bot"}}, "Triage Bot"),
            ({"__typename": "MachineUserActor", "machineUser": None}, "Bot"),
            ({"__typename": "DeletedCustomerActor"}, UNKNOWN),
            (None, UNKNOWN),
            ({}, UNKNOWN),
        ],
    )
    def test_display_name(self, raw, expected):
        """Test every actor variant and fallback."""
        assert actor_display_name(parse_actor(raw)) == expected


# =============================================================================
# Entry Tests
# =============================================================================


class TestEntryContent:
    """Tests for entry resolution."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (CHAT, "Hi, I need help"),
            ({"__typename": "ChatEntry", "text": "unaliased"}, "unaliased"),
            ({"__typename": "ChatEntry", "chatText": None}, ""),
            ({"__typename": "NoteEntry", "noteText": "Internal: VIP"}, "Internal: VIP"),
            ({"__typename": "EmailEntry", "textContent": "Body", "subject": "Subj"}, "Body"),
            ({"__typename": "EmailEntry", "textContent": None, "subject": "Subj"}, "Subj"),
            ({"__typename": "EmailEntry"}, ""),
            ({"__typename": "SlackMessageEntry", "text": "hidden"}, ""),
            (None, ""),
        ],
    )
    def test_content(self, raw, expected):
        """Test every entry variant and fallback."""
        assert entry_content(parse_entry(raw)) == expected

    def test_custom_entry_joins_text_components(self):
        """Test that only ComponentText parts are joined, one per line."""
        raw = {
            "__typename": "CustomEntry",
            "title": "Order shipped",
            "components": [
                {"__typename": "ComponentText", "componentText": "Line one"},
                {"__typename": "ComponentDivider"},
                {"__typename": "ComponentText", "componentText": "Line two"},
            ],
        }
        assert entry_content(parse_entry(raw)) == "Line one\nLine two"

    def test_custom_entry_falls_back_to_title(self):
        """Test a custom entry with no components."""
        raw = {"__typename": "CustomTimelineEntry", "title": "Order shipped", "components": []}
        assert entry_content(parse_entry(raw)) == "Order shipped"

    def test_custom_entry_without_text_components_uses_title(self):
        """Test components that contain no text parts."""
        raw = {
            "__typename": "CustomEntry",
            "title": "Order shipped",
            "components": [{"__typename": "ComponentDivider"}],
        }
        assert entry_content(parse_entry(raw)) == "Order shipped"


# =============================================================================
# Reconstruction Tests
# =============================================================================


class TestReconstruct:
    """Tests for reconstruct()."""

    def test_filters_to_thread_in_feed_order(self):
        """Test thread filtering and order preservation."""
        feed = connection(
            node("e1", "th_A", entry=CHAT),
            node("e2", "th_B", entry=CHAT),
            node("e3", "th_A", entry={"__typename": "NoteEntry", "noteText": "note"}),
            node("e4", None, entry=CHAT),
        )
        timeline = reconstruct(feed, "th_A")

        assert [item.id for item in timeline.items] == ["e1", "e3"]
        assert not timeline.truncated

    def test_item_shape(self):
        """Test the output item fields."""
        feed = connection(
            node(
                "e1",
                "th_A",
                actor={"__typename": "CustomerActor", "customer": {"fullName": "Jane"}},
                entry=CHAT,
            )
        )
        [item] = reconstruct(feed, "th_A").to_list()
        assert item == {
            "id": "e1",
            "timestamp": "2024-05-01T10:00:01Z",
            "actor": "Jane",
            "type": "ChatEntry",
            "content": "Hi, I need help",
        }

    def test_absent_entry_type_is_unknown(self):
        """Test an entry without a typename."""
        [item] = reconstruct(connection(node("e1", "th_A")), "th_A").items
        assert item.type == UNKNOWN
        assert item.content == ""
        assert item.actor == UNKNOWN

    def test_full_page_with_more_is_truncated(self):
        """Test the truncation flag at the page bound."""
        nodes = [node(f"e{i}", "th_A", entry=CHAT) for i in range(3)]
        timeline = reconstruct(connection(*nodes, has_next_page=True), "th_A", page_size=3)
        assert timeline.truncated

    def test_short_page_is_not_truncated(self):
        """Test that a partial page is complete even if pageInfo says otherwise."""
        nodes = [node(f"e{i}", "th_A", entry=CHAT) for i in range(2)]
        timeline = reconstruct(connection(*nodes, has_next_page=True), "th_A", page_size=3)
        assert not timeline.truncated

    def test_empty_feed(self):
        """Test a customer with no activity."""
        timeline = reconstruct(None, "th_A")
        assert timeline.items == ()
        assert timeline.to_list() == []


class TestFetchThreadTimeline:
    """Tests for fetch_thread_timeline()."""

    @pytest.mark.asyncio
    async def test_fetches_fifty_entries(self, plain_client):
        """Test the fixed page size."""
        with patch.object(
            plain_client,
            "get_timeline_entries",
            new_callable=AsyncMock,
            return_value=PlainResult.ok(connection(node("e1", "th_A", entry=CHAT))),
        ) as mock_fetch:
            timeline = await fetch_thread_timeline(plain_client, "c_01", "th_A")

        mock_fetch.assert_awaited_once_with("c_01", first=50)
        assert len(timeline.items) == 1

    @pytest.mark.asyncio
    async def test_failure_degrades_to_empty(self, plain_client):
        """Test that a fetch error yields an empty timeline."""
        with patch.object(
            plain_client,
            "get_timeline_entries",
            new_callable=AsyncMock,
            return_value=PlainResult.fail(PlainError("Forbidden")),
        ):
            timeline = await fetch_thread_timeline(plain_client, "c_01", "th_A")

        assert timeline.thread_id == "th_A"
        assert timeline.items == ()


class TestTimelineQuery:
    """Tests that the timeline document requests what the resolvers read."""

    @pytest.mark.parametrize(
        "variant",
        [UserActor, CustomerActor, SystemActor, MachineUserActor, ChatEntry, EmailEntry, NoteEntry, CustomEntry],
    )
    def test_selects_variant_fields(self, variant):
        """Test every variant has an inline fragment selecting its fields."""
        assert f"... on {variant.__name__}" in queries.TIMELINE_ENTRIES
        for name, info in variant.model_fields.items():
            if name == "typename":
                continue
            assert (info.alias or name) in queries.TIMELINE_ENTRIES, f"{variant.__name__}.{name}"

    def test_selects_system_actor_type(self):
        """Test the system actor subtype is requested."""
        assert "... on SystemActor { systemActorType }" in queries.TIMELINE_ENTRIES

    @pytest.mark.parametrize(
        "field",
        ["threadId", "iso8601", "hasNextPage", "componentText: text", "fullName", "email { email }"],
    )
    def test_selects_shared_fields(self, field):
        """Test fields read outside the variant models."""
        assert field in queries.TIMELINE_ENTRIES
