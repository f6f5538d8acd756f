"""
Plain customer tools.

search_customers and get_customer_timeline are hand-written; everything
else is a declarative PlainOperation.

Upserts:
    upsert_customer sends exactly one upsertCustomer mutation. Plain decides
    whether to create or update from the identifier and echoes the outcome
    (CREATED, UPDATED or NOOP) with the customer, so repeating a call with the
    same identifier returns the same customer ID.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, model_validator

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.integrations.plain.timeline import reconstruct
from plain_mcp.tools.base import ToolResult
from plain_mcp.tools.plain.base import (
    PlainOperation,
    PlainTool,
    ToolInput,
    compact,
    error_result,
    exactly_one,
    limit_field,
    pick,
)
from plain_mcp.tools.plain.threads import text_components

logger = logging.getLogger(__name__)

NO_CUSTOMER_WITH_EMAIL = "No customer found with that email"


# =============================================================================
# Input models
# =============================================================================


class SearchCustomersInput(ToolInput):
    email: str = Field(..., min_length=1, description="Email address to search for")


class CustomerIdInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")


class CustomerExternalIdInput(ToolInput):
    external_id: str = Field(..., min_length=1, description="Your external ID for the customer")


class ListCustomersInput(ToolInput):
    limit: int = limit_field()


class CustomerTimelineInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    limit: int = limit_field()


class UpsertCustomerInput(ToolInput):
    """
    Identify the customer by exactly one of the `identifier_*` fields.

    The remaining fields are applied on create and on update.
    """

    identifier_email: str | None = Field(None, description="Match on email address")
    identifier_external_id: str | None = Field(None, description="Match on your external ID")
    identifier_customer_id: str | None = Field(None, description="Match on Plain customer ID")
    full_name: str = Field(..., min_length=1, description="Customer's full name")
    short_name: str | None = Field(None, description="Customer's short name")
    email: str | None = Field(
        None, description="Customer's email (defaults to identifier_email)"
    )
    external_id: str | None = Field(None, description="Your external ID for the customer")

    @model_validator(mode="after")
    def _check_identifier(self) -> UpsertCustomerInput:
        exactly_one(
            self, "identifier_email", "identifier_external_id", "identifier_customer_id"
        )
        if self.email is None and self.identifier_email is None:
            raise ValueError("email is required unless identifier_email is given")
        return self


class VerifyCustomerEmailInput(ToolInput):
    email: str = Field(..., min_length=1, description="Email address to mark as verified")


class UpdateCustomerCompanyInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    company_id: str | None = Field(None, description="Plain company ID")
    company_domain_name: str | None = Field(None, description="Company domain, e.g. acme.com")

    @model_validator(mode="after")
    def _one_company(self) -> UpdateCustomerCompanyInput:
        exactly_one(self, "company_id", "company_domain_name")
        return self


class CreateCustomerEventInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    title: str = Field(..., min_length=1, description="Event title")
    text: str | None = Field(None, description="Optional event body")
    external_id: str | None = Field(None, description="Optional external ID for the event")


# =============================================================================
# Custom tools
# =============================================================================


class SearchCustomersTool(PlainTool):
    """Exact-match customer lookup by email."""

    tool_name = "search_customers"
    tool_description = "Search for customers by email"
    tool_title = "Search Customers"
    input_model = SearchCustomersInput
    read_only = True

    async def run(self, params: SearchCustomersInput) -> ToolResult:
        result = await self._client.get_customer_by_email(params.email)
        if not result.success:
            return error_result(result)
        if result.data is None:
            return ToolResult.success(NO_CUSTOMER_WITH_EMAIL)

        return ToolResult.json(result.data.to_dict())


class GetCustomerTimelineTool(PlainTool):
    """The customer's most recent timeline entries across all threads."""

    tool_name = "get_customer_timeline"
    tool_description = (
        "Get a customer's recent timeline entries (chats, emails, notes, events) "
        "across all of their threads"
    )
    tool_title = "Get Customer Timeline"
    input_model = CustomerTimelineInput
    read_only = True

    async def run(self, params: CustomerTimelineInput) -> ToolResult:
        result = await self._client.get_timeline_entries(params.customer_id, first=params.limit)
        if not result.success:
            return error_result(result)

        timeline = reconstruct(result.data, page_size=params.limit)
        return ToolResult.json(
            {
                "customerId": params.customer_id,
                "entries": timeline.to_list(),
                "truncated": timeline.truncated,
            }
        )


# =============================================================================
# Declarative operations
# =============================================================================


def _upsert_customer_variables(p: UpsertCustomerInput) -> dict[str, Any]:
    if p.identifier_email is not None:
        identifier = {"emailAddress": p.identifier_email}
    elif p.identifier_external_id is not None:
        identifier = {"externalId": p.identifier_external_id}
    else:
        identifier = {"customerId": p.identifier_customer_id}

    email = p.email or p.identifier_email
    on_create = compact(
        {
            "fullName": p.full_name,
            "shortName": p.short_name,
            "email": {"email": email, "isVerified": False},
            "externalId": p.external_id,
        }
    )
    on_update = compact(
        {
            "fullName": {"value": p.full_name},
            "shortName": {"value": p.short_name} if p.short_name is not None else None,
            "email": {"email": p.email, "isVerified": False} if p.email is not None else None,
            "externalId": {"value": p.external_id} if p.external_id is not None else None,
        }
    )
    return {"input": {"identifier": identifier, "onCreate": on_create, "onUpdate": on_update}}


def _verify_email_variables(p: VerifyCustomerEmailInput) -> dict[str, Any]:
    verified = {"email": p.email, "isVerified": True}
    return {
        "input": {
            "identifier": {"emailAddress": p.email},
            "onCreate": {"fullName": p.email, "email": verified},
            "onUpdate": {"email": verified},
        }
    }


def _customer_input(p: Any) -> dict[str, Any]:
    return {"input": {"customerId": p.customer_id}}


_customer = pick("customer")

CUSTOMER_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="get_customer",
        description="Get a customer by Plain customer ID",
        title="Get Customer",
        document=queries.CUSTOMER,
        root="customer",
        input_model=CustomerIdInput,
        variables=lambda p: {"customerId": p.customer_id},
        not_found="Customer not found",
        read_only=True,
    ),
    PlainOperation(
        name="get_customer_by_external_id",
        description="Get a customer by the external ID you assigned to them",
        title="Get Customer by External ID",
        document=queries.CUSTOMER_BY_EXTERNAL_ID,
        root="customerByExternalId",
        input_model=CustomerExternalIdInput,
        variables=lambda p: {"externalId": p.external_id},
        not_found="No customer found with that external ID",
        read_only=True,
    ),
    PlainOperation(
        name="list_customers",
        description="List customers",
        title="List Customers",
        document=queries.CUSTOMERS,
        root="customers",
        input_model=ListCustomersInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="upsert_customer",
        description=(
            "Create a customer, or update the existing one matching the identifier. "
            "Returns whether the customer was CREATED, UPDATED or unchanged (NOOP)"
        ),
        title="Upsert Customer",
        document=mutations.UPSERT_CUSTOMER,
        root="upsertCustomer",
        input_model=UpsertCustomerInput,
        variables=_upsert_customer_variables,
        idempotent=True,
    ),
    PlainOperation(
        name="delete_customer",
        description="Delete a customer and all of their threads",
        title="Delete Customer",
        document=mutations.DELETE_CUSTOMER,
        root="deleteCustomer",
        input_model=CustomerIdInput,
        variables=_customer_input,
        done_message="Customer deleted",
        destructive=True,
        idempotent=True,
    ),
    PlainOperation(
        name="mark_customer_as_spam",
        description="Mark a customer as spam",
        title="Mark Customer as Spam",
        document=mutations.MARK_CUSTOMER_AS_SPAM,
        root="markCustomerAsSpam",
        input_model=CustomerIdInput,
        variables=_customer_input,
        select=_customer,
        idempotent=True,
    ),
    PlainOperation(
        name="unmark_customer_as_spam",
        description="Remove the spam mark from a customer",
        title="Unmark Customer as Spam",
        document=mutations.UNMARK_CUSTOMER_AS_SPAM,
        root="unmarkCustomerAsSpam",
        input_model=CustomerIdInput,
        variables=_customer_input,
        select=_customer,
        idempotent=True,
    ),
    PlainOperation(
        name="verify_customer_email",
        description=(
            "Mark a customer's email address as verified. "
            "Creates the customer if no customer has that email"
        ),
        title="Verify Customer Email",
        document=mutations.UPSERT_CUSTOMER,
        root="upsertCustomer",
        input_model=VerifyCustomerEmailInput,
        variables=_verify_email_variables,
        idempotent=True,
    ),
    PlainOperation(
        name="update_customer_company",
        description="Set the company a customer belongs to",
        title="Update Customer Company",
        document=mutations.UPDATE_CUSTOMER_COMPANY,
        root="updateCustomerCompany",
        input_model=UpdateCustomerCompanyInput,
        variables=lambda p: {
            "input": {
                "customerId": p.customer_id,
                "companyIdentifier": compact(
                    {"companyId": p.company_id, "companyDomainName": p.company_domain_name}
                ),
            }
        },
        select=_customer,
        idempotent=True,
    ),
    PlainOperation(
        name="create_customer_event",
        description="Add a custom event to a customer's timeline",
        title="Create Customer Event",
        document=mutations.CREATE_CUSTOMER_EVENT,
        root="createCustomerEvent",
        input_model=CreateCustomerEventInput,
        variables=lambda p: {
            "input": compact(
                {
                    "customerIdentifier": {"customerId": p.customer_id},
                    "title": p.title,
                    "components": text_components(p.text),
                    "externalId": p.external_id,
                }
            )
        },
        select=pick("customerEvent"),
    ),
)

CUSTOMER_TOOLS: tuple[type[PlainTool], ...] = (SearchCustomersTool, GetCustomerTimelineTool)
