"""
Tests for the Plain tool catalog as a whole.
"""

import pytest

from plain_mcp.tools.plain import ALL_OPERATIONS, build_plain_tools, create_plain_registry

EXPECTED_TOOLS = {
    # threads
    "list_threads",
    "get_thread",
    "get_queue_stats",
    "get_thread_by_external_id",
    "create_thread",
    "assign_thread",
    "unassign_thread",
    "change_thread_priority",
    "mark_thread_as_done",
    "mark_thread_as_todo",
    "snooze_thread",
    "update_thread_title",
    "change_thread_customer",
    "add_labels",
    "remove_labels",
    "reply_to_thread",
    "create_thread_event",
    "upsert_thread_field",
    "delete_thread_field",
    "update_thread_tenant",
    # customers
    "search_customers",
    "get_customer_timeline",
    "get_customer",
    "get_customer_by_external_id",
    "list_customers",
    "upsert_customer",
    "delete_customer",
    "mark_customer_as_spam",
    "unmark_customer_as_spam",
    "verify_customer_email",
    "update_customer_company",
    "create_customer_event",
    # customer groups
    "list_customer_groups",
    "get_customer_group",
    "create_customer_group",
    "add_customer_to_customer_groups",
    "remove_customer_from_customer_groups",
    # companies
    "list_companies",
    "get_company",
    "upsert_company",
    "update_company_tier",
    # tenants
    "list_tenants",
    "get_tenant",
    "search_tenants",
    "upsert_tenant",
    "add_customer_to_tenants",
    "remove_customer_from_tenants",
    "set_customer_tenants",
    "update_tenant_tier",
    # labels
    "list_label_types",
    "get_label_type",
    "create_label_type",
    "archive_label_type",
    "unarchive_label_type",
    # messaging
    "create_note",
    "delete_note",
    "send_chat",
    "send_new_email",
    "reply_to_email",
    # workspace
    "get_workspace",
    "get_my_user",
    "list_users",
    "get_user_by_email",
    "list_tiers",
    "get_tier",
    "list_webhook_targets",
    "get_webhook_target",
    "create_webhook_target",
    "update_webhook_target",
    "delete_webhook_target",
}


@pytest.fixture
def tools(plain_client):
    return build_plain_tools(plain_client)


class TestCatalog:
    """Tests for the assembled catalog."""

    def test_names_unique_and_complete(self, tools):
        """Test the exact set of tool names."""
        names = [tool.name for tool in tools]
        assert len(names) == len(set(names)) == 70
        assert set(names) == EXPECTED_TOOLS

    def test_custom_tools_listed_first(self, tools):
        """Test catalog order."""
        assert [tool.name for tool in tools[:5]] == [
            "list_threads",
            "get_thread",
            "get_queue_stats",
            "search_customers",
            "get_customer_timeline",
        ]

    def test_registry_accepts_every_tool(self, plain_client):
        """Test that every schema passes registry validation."""
        registry = create_plain_registry(plain_client)
        assert len(registry) == 70

    def test_schemas_are_objects(self, tools):
        """Test each input schema."""
        for tool in tools:
            schema = tool.input_schema
            assert schema["type"] == "object", tool.name
            assert isinstance(schema["properties"], dict), tool.name
            assert "title" not in schema, tool.name
            assert tool.description, tool.name

    def test_reads_are_read_only(self):
        """Test that only queries carry the read-only hint."""
        for op in ALL_OPERATIONS:
            is_query = op.document.lstrip().startswith("query")
            assert op.read_only == is_query, op.name

    def test_destructive_hint_only_on_writes(self, tools):
        """Test that read-only tools are never destructive."""
        for tool in tools:
            annotations = tool.annotations
            if annotations.read_only_hint:
                assert not annotations.destructive_hint, tool.name
                assert annotations.idempotent_hint, tool.name

    def test_required_arguments(self, tools):
        """Test a few required argument lists."""
        by_name = {tool.name: tool for tool in tools}
        assert by_name["get_thread"].input_schema["required"] == ["thread_id"]
        assert "required" not in by_name["get_queue_stats"].input_schema
        assert "required" not in by_name["list_threads"].input_schema
