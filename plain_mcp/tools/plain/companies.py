"""
Plain company and tenant tools.

Companies are inferred from customer email domains; tenants mirror the
accounts/organisations of your own product. Both can be placed on a tier.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.integrations.plain.reshape import flatten_edges
from plain_mcp.tools.plain.base import (
    PlainOperation,
    ToolInput,
    compact,
    exactly_one,
    limit_field,
    pick,
)

# =============================================================================
# Input models
# =============================================================================


class ListInput(ToolInput):
    limit: int = limit_field()


class CompanyIdInput(ToolInput):
    company_id: str = Field(..., min_length=1, description="The company ID")


class UpsertCompanyInput(ToolInput):
    domain_name: str = Field(..., min_length=1, description="Company domain, e.g. acme.com")
    name: str = Field(..., min_length=1, description="Company name")


class TierChoice(ToolInput):
    tier_id: str | None = Field(None, description="Plain tier ID")
    tier_external_id: str | None = Field(None, description="Your external tier ID")

    @model_validator(mode="after")
    def _one_tier(self) -> Any:
        exactly_one(self, "tier_id", "tier_external_id")
        return self

    def tier_identifier(self) -> dict[str, str]:
        return compact({"tierId": self.tier_id, "externalId": self.tier_external_id})


class UpdateCompanyTierInput(TierChoice):
    company_id: str = Field(..., min_length=1, description="The company ID")


class TenantIdInput(ToolInput):
    tenant_id: str = Field(..., min_length=1, description="The tenant ID")


class SearchTenantsInput(ToolInput):
    term: str = Field(..., min_length=1, description="Text to search tenant names and IDs for")
    limit: int = limit_field()


class UpsertTenantInput(ToolInput):
    external_id: str = Field(..., min_length=1, description="Your external ID for the tenant")
    name: str = Field(..., min_length=1, description="Tenant name")
    url: str | None = Field(None, description="Optional link to the tenant in your product")


class CustomerTenantsInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    tenant_external_ids: list[str] = Field(..., description="External IDs of the tenants")


class UpdateTenantTierInput(TierChoice):
    tenant_external_id: str = Field(..., min_length=1, description="External ID of the tenant")


def _customer_tenants_variables(p: CustomerTenantsInput) -> dict[str, Any]:
    return {
        "input": {
            "customerIdentifier": {"customerId": p.customer_id},
            "tenantIdentifiers": [{"externalId": ext} for ext in p.tenant_external_ids],
        }
    }


def _search_results(connection: Any) -> list[Any]:
    return [node.get("tenant") for node in flatten_edges(connection) if node]


# =============================================================================
# Operations
# =============================================================================

COMPANY_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="list_companies",
        description="List companies",
        title="List Companies",
        document=queries.COMPANIES,
        root="companies",
        input_model=ListInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_company",
        description="Get a company by ID",
        title="Get Company",
        document=queries.COMPANY,
        root="company",
        input_model=CompanyIdInput,
        variables=lambda p: {"companyId": p.company_id},
        not_found="Company not found",
        read_only=True,
    ),
    PlainOperation(
        name="upsert_company",
        description="Create a company, or update the one with this domain",
        title="Upsert Company",
        document=mutations.UPSERT_COMPANY,
        root="upsertCompany",
        input_model=UpsertCompanyInput,
        variables=lambda p: {
            "input": {
                "identifier": {"companyDomainName": p.domain_name},
                "name": p.name,
                "domainName": p.domain_name,
            }
        },
        idempotent=True,
    ),
    PlainOperation(
        name="update_company_tier",
        description="Place a company on a tier",
        title="Update Company Tier",
        document=mutations.UPDATE_COMPANY_TIER,
        root="updateCompanyTier",
        input_model=UpdateCompanyTierInput,
        variables=lambda p: {
            "input": {
                "companyIdentifier": {"companyId": p.company_id},
                "tierIdentifier": p.tier_identifier(),
            }
        },
        select=pick("companyTierMembership"),
        idempotent=True,
    ),
)

TENANT_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="list_tenants",
        description="List tenants",
        title="List Tenants",
        document=queries.TENANTS,
        root="tenants",
        input_model=ListInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_tenant",
        description="Get a tenant by ID",
        title="Get Tenant",
        document=queries.TENANT,
        root="tenant",
        input_model=TenantIdInput,
        variables=lambda p: {"tenantId": p.tenant_id},
        not_found="Tenant not found",
        read_only=True,
    ),
    PlainOperation(
        name="search_tenants",
        description="Search tenants by name or external ID",
        title="Search Tenants",
        document=queries.SEARCH_TENANTS,
        root="searchTenants",
        input_model=SearchTenantsInput,
        variables=lambda p: {"searchQuery": {"term": p.term}, "first": p.limit},
        select=_search_results,
        read_only=True,
    ),
    PlainOperation(
        name="upsert_tenant",
        description="Create a tenant, or update the one with this external ID",
        title="Upsert Tenant",
        document=mutations.UPSERT_TENANT,
        root="upsertTenant",
        input_model=UpsertTenantInput,
        variables=lambda p: {
            "input": compact(
                {
                    "identifier": {"externalId": p.external_id},
                    "externalId": p.external_id,
                    "name": p.name,
                    "url": {"value": p.url} if p.url is not None else None,
                }
            )
        },
        idempotent=True,
    ),
    PlainOperation(
        name="add_customer_to_tenants",
        description="Add a customer to tenants",
        title="Add Customer to Tenants",
        document=mutations.ADD_CUSTOMER_TO_TENANTS,
        root="addCustomerToTenants",
        input_model=CustomerTenantsInput,
        variables=_customer_tenants_variables,
        done_message="Customer added to tenants",
        idempotent=True,
    ),
    PlainOperation(
        name="remove_customer_from_tenants",
        description="Remove a customer from tenants",
        title="Remove Customer from Tenants",
        document=mutations.REMOVE_CUSTOMER_FROM_TENANTS,
        root="removeCustomerFromTenants",
        input_model=CustomerTenantsInput,
        variables=_customer_tenants_variables,
        done_message="Customer removed from tenants",
        destructive=True,
        idempotent=True,
    ),
    PlainOperation(
        name="set_customer_tenants",
        description="Replace the full set of tenants a customer belongs to",
        title="Set Customer Tenants",
        document=mutations.SET_CUSTOMER_TENANTS,
        root="setCustomerTenants",
        input_model=CustomerTenantsInput,
        variables=_customer_tenants_variables,
        done_message="Customer tenants updated",
        idempotent=True,
    ),
    PlainOperation(
        name="update_tenant_tier",
        description="Place a tenant on a tier",
        title="Update Tenant Tier",
        document=mutations.UPDATE_TENANT_TIER,
        root="updateTenantTier",
        input_model=UpdateTenantTierInput,
        variables=lambda p: {
            "input": {
                "tenantIdentifier": {"externalId": p.tenant_external_id},
                "tierIdentifier": p.tier_identifier(),
            }
        },
        select=pick("tenantTierMembership"),
        idempotent=True,
    ),
)
