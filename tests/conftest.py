"""
Pytest configuration and fixtures for plain-mcp tests.

No test touches the network: the Plain API is replaced either by patching
PlainClient.execute / IntegrationClient._request with AsyncMock, or by an
httpx.MockTransport.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from plain_mcp.integrations.plain import PlainClient, PlainConfig  # noqa: E402


@pytest.fixture
def plain_config():
    """Create test Plain configuration."""
    return PlainConfig(
        api_key="plainApiKey_test",
        base_url="https://plain.test/graphql/v1",
    )


@pytest.fixture
def plain_client(plain_config):
    """Plain client whose transport is never used unless a test patches it."""
    return PlainClient(plain_config)


def make_thread_node(
    thread_id="th_01",
    *,
    title="Refund request",
    status="TODO",
    priority=2,
    customer_id="c_01",
    customer_name="Jane Doe",
    customer_email="jane@example.com",
    labels=(),
    assigned_to=None,
):
    """Raw `ThreadParts` node as Plain returns it."""
    customer = None
    if customer_id is not None:
        customer = {
            "id": customer_id,
            "fullName": customer_name,
            "email": {"email": customer_email} if customer_email else None,
        }
    return {
        "id": thread_id,
        "externalId": None,
        "title": title,
        "description": "Customer wants a refund",
        "status": status,
        "priority": priority,
        "customer": customer,
        "assignedTo": assigned_to,
        "labels": [{"id": f"l_{name}", "labelType": {"id": f"lt_{name}", "name": name}} for name in labels],
        "createdAt": {"iso8601": "2024-05-01T10:00:00.000Z"},
        "updatedAt": {"iso8601": "2024-05-02T10:00:00.000Z"},
    }


def make_customer_node(customer_id="c_01", *, full_name="Jane Doe", email="jane@example.com"):
    """Raw `CustomerParts` node as Plain returns it."""
    return {
        "id": customer_id,
        "fullName": full_name,
        "shortName": full_name.split()[0] if full_name else None,
        "externalId": "ext_01",
        "email": {"email": email, "isVerified": True} if email else None,
        "createdAt": {"iso8601": "2024-01-01T00:00:00.000Z"},
        "updatedAt": {"iso8601": "2024-02-01T00:00:00.000Z"},
    }


def connection(*nodes, has_next_page=False):
    """Wrap nodes in a Relay connection."""
    return {
        "edges": [{"node": node} for node in nodes],
        "pageInfo": {"hasNextPage": has_next_page, "endCursor": None},
    }


@pytest.fixture
def thread_node():
    return make_thread_node


@pytest.fixture
def customer_node():
    return make_customer_node
