"""
Tests for the Plain customer tools.

Tests cover:
- search_customers found / soft not-found
- get_customer_timeline across threads
- upsert_customer identifier rules and the single mutation sent
- Soft not-found reads on declarative operations
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from conftest import connection, make_customer_node
from plain_mcp.integrations.plain import Customer
from plain_mcp.integrations.plain.result import PlainError, PlainResult
from plain_mcp.tools.plain import (
    ALL_OPERATIONS,
    GetCustomerTimelineTool,
    PlainOperationTool,
    SearchCustomersTool,
)


def operation_tool(name, client):
    [op] = [op for op in ALL_OPERATIONS if op.name == name]
    return PlainOperationTool(op, client=client)


class TestSearchCustomers:
    """Tests for SearchCustomersTool."""

    @pytest.mark.asyncio
    async def test_found(self, plain_client):
        """Test a matching customer."""
        with patch.object(
            plain_client,
            "get_customer_by_email",
            new_callable=AsyncMock,
            return_value=PlainResult.ok(Customer(**make_customer_node())),
        ) as mock_lookup:
            result = await SearchCustomersTool(client=plain_client).execute(
                {"email": "  jane@example.com "}
            )

        mock_lookup.assert_awaited_once_with("jane@example.com")
        data = json.loads(result.text)
        assert data["id"] == "c_01"
        assert data["email"] == "jane@example.com"
        assert result.structured_content == data

    @pytest.mark.asyncio
    async def test_not_found_is_not_an_error(self, plain_client):
        """Test the informational not-found text."""
        with patch.object(
            plain_client,
            "get_customer_by_email",
            new_callable=AsyncMock,
            return_value=PlainResult.ok(None),
        ):
            result = await SearchCustomersTool(client=plain_client).execute(
                {"email": "nobody@example.com"}
            )

        assert not result.is_error
        assert result.text == "No customer found with that email"

    @pytest.mark.asyncio
    async def test_missing_email(self, plain_client):
        """Test that email is required."""
        result = await SearchCustomersTool(client=plain_client).execute({})
        assert result.is_error
        assert "email" in result.text


class TestGetCustomerTimeline:
    """Tests for GetCustomerTimelineTool."""

    @pytest.mark.asyncio
    async def test_entries_across_threads(self, plain_client):
        """Test that no thread filter is applied."""
        feed = connection(
            {"id": "e1", "threadId": "th_1", "entry": {"__typename": "NoteEntry", "noteText": "a"}},
            {"id": "e2", "threadId": "th_2", "entry": {"__typename": "NoteEntry", "noteText": "b"}},
            {"id": "e3", "threadId": None, "entry": {"__typename": "CustomEntry", "title": "Signed up"}},
            has_next_page=True,
        )
        with patch.object(
            plain_client,
            "get_timeline_entries",
            new_callable=AsyncMock,
            return_value=PlainResult.ok(feed),
        ) as mock_fetch:
            result = await GetCustomerTimelineTool(client=plain_client).execute(
                {"customer_id": "c_01", "limit": 3}
            )

        mock_fetch.assert_awaited_once_with("c_01", first=3)
        data = json.loads(result.text)
        assert data["customerId"] == "c_01"
        assert [e["content"] for e in data["entries"]] == ["a", "b", "Signed up"]
        assert data["truncated"] is True


class TestUpsertCustomer:
    """Tests for upsert_customer."""

    @pytest.mark.asyncio
    async def test_sends_one_mutation_and_echoes_outcome(self, plain_client):
        """Test the create-or-update call."""
        payload = {
            "result": "CREATED",
            "customer": make_customer_node("c_new"),
            "error": None,
        }
        with patch.object(
            plain_client, "execute", new_callable=AsyncMock, return_value=PlainResult.ok(payload)
        ) as mock_execute:
            result = await operation_tool("upsert_customer", plain_client).execute(
                {"identifier_email": "jane@example.com", "full_name": "Jane Doe"}
            )

        mock_execute.assert_awaited_once()
        assert mock_execute.call_args.kwargs == {"root": "upsertCustomer"}
        assert mock_execute.call_args.args[1] == {
            "input": {
                "identifier": {"emailAddress": "jane@example.com"},
                "onCreate": {
                    "fullName": "Jane Doe",
                    "email": {"email": "jane@example.com", "isVerified": False},
                },
                "onUpdate": {"fullName": {"value": "Jane Doe"}},
            }
        }
        data = json.loads(result.text)
        assert data["result"] == "CREATED"
        assert data["customer"]["id"] == "c_new"
        assert "error" not in data

    @pytest.mark.asyncio
    async def test_repeated_upsert_targets_same_customer(self, plain_client):
        """Test that upserting the same customer twice resolves to one record."""
        arguments = {"identifier_email": "jane@example.com", "full_name": "Jane Doe"}
        with patch.object(
            plain_client,
            "execute",
            new_callable=AsyncMock,
            side_effect=[
                PlainResult.ok({"result": "CREATED", "customer": make_customer_node("c_01"), "error": None}),
                PlainResult.ok({"result": "NOOP", "customer": make_customer_node("c_01"), "error": None}),
            ],
        ) as mock_execute:
            tool = operation_tool("upsert_customer", plain_client)
            first = await tool.execute(dict(arguments))
            second = await tool.execute(dict(arguments))

        assert not first.is_error
        assert not second.is_error
        assert mock_execute.await_count == 2
        first_call, second_call = mock_execute.call_args_list
        assert first_call.args[1] == second_call.args[1]
        assert json.loads(first.text)["result"] == "CREATED"
        assert json.loads(second.text)["result"] == "NOOP"
        assert json.loads(first.text)["customer"]["id"] == json.loads(second.text)["customer"]["id"]

    @pytest.mark.asyncio
    async def test_external_id_identifier(self, plain_client):
        """Test identifying by external ID with explicit fields."""
        payload = {"result": "UPDATED", "customer": make_customer_node(), "error": None}
        with patch.object(
            plain_client, "execute", new_callable=AsyncMock, return_value=PlainResult.ok(payload)
        ) as mock_execute:
            await operation_tool("upsert_customer", plain_client).execute(
                {
                    "identifier_external_id": "ext_01",
                    "full_name": "Jane Doe",
                    "short_name": "Jane",
                    "email": "jane@example.com",
                }
            )

        variables = mock_execute.call_args.args[1]["input"]
        assert variables["identifier"] == {"externalId": "ext_01"}
        assert variables["onUpdate"] == {
            "fullName": {"value": "Jane Doe"},
            "shortName": {"value": "Jane"},
            "email": {"email": "jane@example.com", "isVerified": False},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "arguments,message",
        [
            ({"full_name": "Jane", "email": "j@x.com"}, "Provide exactly one of"),
            (
                {
                    "identifier_email": "j@x.com",
                    "identifier_customer_id": "c_01",
                    "full_name": "Jane",
                },
                "Provide exactly one of",
            ),
            ({"identifier_external_id": "ext_01", "full_name": "Jane"}, "email is required"),
            ({"identifier_email": "j@x.com"}, "full_name"),
        ],
    )
    async def test_invalid_identifiers(self, plain_client, arguments, message):
        """Test identifier rules before any remote call."""
        with patch.object(plain_client, "execute", new_callable=AsyncMock) as mock_execute:
            result = await operation_tool("upsert_customer", plain_client).execute(arguments)

        assert result.is_error
        assert message in result.text
        mock_execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_field_errors_reported(self, plain_client):
        """Test that per-field validation details reach the caller."""
        error = PlainError.from_payload(
            {
                "message": "There were validation errors.",
                "type": "VALIDATION",
                "code": "input_validation",
                "fields": [{"field": "email", "message": "Invalid email", "type": "VALIDATION"}],
            }
        )
        with patch.object(
            plain_client, "execute", new_callable=AsyncMock, return_value=PlainResult.fail(error)
        ):
            result = await operation_tool("upsert_customer", plain_client).execute(
                {"identifier_email": "bad", "full_name": "Jane"}
            )

        assert result.text == "Error: There were validation errors. (email: Invalid email)"


class TestCustomerReads:
    """Tests for declarative customer reads."""

    @pytest.mark.asyncio
    async def test_get_customer_not_found(self, plain_client):
        """Test the soft not-found text."""
        with patch.object(
            plain_client, "execute", new_callable=AsyncMock, return_value=PlainResult.ok(None)
        ):
            result = await operation_tool("get_customer", plain_client).execute(
                {"customer_id": "c_missing"}
            )

        assert not result.is_error
        assert result.text == "Customer not found"

    @pytest.mark.asyncio
    async def test_list_customers_flattens_connection(self, plain_client):
        """Test that list payloads become plain arrays."""
        page = connection(make_customer_node("c_1"), make_customer_node("c_2"))
        with patch.object(
            plain_client, "execute", new_callable=AsyncMock, return_value=PlainResult.ok(page)
        ) as mock_execute:
            result = await operation_tool("list_customers", plain_client).execute({"limit": 2})

        assert mock_execute.call_args.args[1] == {"first": 2}
        data = json.loads(result.text)
        assert [c["id"] for c in data] == ["c_1", "c_2"]
        assert data[0]["createdAt"] == "2024-01-01T00:00:00.000Z"
