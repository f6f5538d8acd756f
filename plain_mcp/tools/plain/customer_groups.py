"""Plain customer group tools."""

from __future__ import annotations

from pydantic import Field

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.tools.plain.base import PlainOperation, ToolInput, limit_field, pick


class ListCustomerGroupsInput(ToolInput):
    limit: int = limit_field()


class CustomerGroupIdInput(ToolInput):
    customer_group_id: str = Field(..., min_length=1, description="The customer group ID")


class CreateCustomerGroupInput(ToolInput):
    name: str = Field(..., min_length=1, description="Display name")
    key: str = Field(..., min_length=1, description="Unique key, e.g. 'enterprise'")
    color: str = Field(..., min_length=1, description="Hex color, e.g. '#4f46e5'")


class CustomerGroupMembershipInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    customer_group_keys: list[str] = Field(..., min_length=1, description="Customer group keys")


def _membership_variables(p: CustomerGroupMembershipInput) -> dict:
    return {
        "input": {
            "customerId": p.customer_id,
            "customerGroupIdentifiers": [{"customerGroupKey": key} for key in p.customer_group_keys],
        }
    }


CUSTOMER_GROUP_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="list_customer_groups",
        description="List customer groups",
        title="List Customer Groups",
        document=queries.CUSTOMER_GROUPS,
        root="customerGroups",
        input_model=ListCustomerGroupsInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_customer_group",
        description="Get a customer group by ID",
        title="Get Customer Group",
        document=queries.CUSTOMER_GROUP,
        root="customerGroup",
        input_model=CustomerGroupIdInput,
        variables=lambda p: {"customerGroupId": p.customer_group_id},
        not_found="Customer group not found",
        read_only=True,
    ),
    PlainOperation(
        name="create_customer_group",
        description="Create a customer group",
        title="Create Customer Group",
        document=mutations.CREATE_CUSTOMER_GROUP,
        root="createCustomerGroup",
        input_model=CreateCustomerGroupInput,
        variables=lambda p: {"input": {"name": p.name, "key": p.key, "color": p.color}},
        select=pick("customerGroup"),
    ),
    PlainOperation(
        name="add_customer_to_customer_groups",
        description="Add a customer to one or more customer groups",
        title="Add Customer to Groups",
        document=mutations.ADD_CUSTOMER_TO_CUSTOMER_GROUPS,
        root="addCustomerToCustomerGroups",
        input_model=CustomerGroupMembershipInput,
        variables=_membership_variables,
        select=pick("customerGroupMemberships"),
        idempotent=True,
    ),
    PlainOperation(
        name="remove_customer_from_customer_groups",
        description="Remove a customer from one or more customer groups",
        title="Remove Customer from Groups",
        document=mutations.REMOVE_CUSTOMER_FROM_CUSTOMER_GROUPS,
        root="removeCustomerFromCustomerGroups",
        input_model=CustomerGroupMembershipInput,
        variables=_membership_variables,
        done_message="Customer removed from customer groups",
        destructive=True,
        idempotent=True,
    ),
)
