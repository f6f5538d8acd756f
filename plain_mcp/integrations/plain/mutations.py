"""
GraphQL mutations for the Plain API.

Every Plain mutation takes a single `input` argument and returns a
payload with an optional `error` (MutationError). The payload selection
always includes that error so the client can unwrap it uniformly.
"""

from __future__ import annotations

from plain_mcp.integrations.plain.queries import (
    COMPANY_FRAGMENT,
    CUSTOMER_FRAGMENT,
    CUSTOMER_GROUP_FRAGMENT,
    LABEL_TYPE_FRAGMENT,
    MUTATION_ERROR_FRAGMENT,
    TENANT_FRAGMENT,
    THREAD_FRAGMENT,
    WEBHOOK_TARGET_FRAGMENT,
)


def _mutation(field: str, input_type: str, selection: str = "", *fragments: str) -> str:
    """Build a single-input mutation document returning `selection` and the error."""
    document = (
        f"mutation {field}($input: {input_type}!) {{\n"
        f"  {field}(input: $input) {{\n"
        f"    {selection}\n"
        f"    error {{ ...MutationErrorParts }}\n"
        f"  }}\n"
        f"}}\n"
    )
    return document + MUTATION_ERROR_FRAGMENT + "".join(fragments)


_THREAD = "thread { ...ThreadParts }"
_CUSTOMER = "customer { ...CustomerParts }"

# =============================================================================
# Threads
# =============================================================================

CREATE_THREAD = _mutation("createThread", "CreateThreadInput", _THREAD, THREAD_FRAGMENT)
ASSIGN_THREAD = _mutation("assignThread", "AssignThreadInput", _THREAD, THREAD_FRAGMENT)
UNASSIGN_THREAD = _mutation("unassignThread", "UnassignThreadInput", _THREAD, THREAD_FRAGMENT)
CHANGE_THREAD_PRIORITY = _mutation(
    "changeThreadPriority", "ChangeThreadPriorityInput", _THREAD, THREAD_FRAGMENT
)
MARK_THREAD_AS_DONE = _mutation(
    "markThreadAsDone", "MarkThreadAsDoneInput", _THREAD, THREAD_FRAGMENT
)
MARK_THREAD_AS_TODO = _mutation(
    "markThreadAsTodo", "MarkThreadAsTodoInput", _THREAD, THREAD_FRAGMENT
)
SNOOZE_THREAD = _mutation("snoozeThread", "SnoozeThreadInput", _THREAD, THREAD_FRAGMENT)
UPDATE_THREAD_TITLE = _mutation(
    "updateThreadTitle", "UpdateThreadTitleInput", _THREAD, THREAD_FRAGMENT
)
CHANGE_THREAD_CUSTOMER = _mutation(
    "changeThreadCustomer", "ChangeThreadCustomerInput", _THREAD, THREAD_FRAGMENT
)
UPDATE_THREAD_TENANT = _mutation(
    "updateThreadTenant", "UpdateThreadTenantInput", _THREAD, THREAD_FRAGMENT
)
ADD_LABELS = _mutation("addLabels", "AddLabelsInput", "labels { id labelType { id name } }")
REMOVE_LABELS = _mutation("removeLabels", "RemoveLabelsInput")
REPLY_TO_THREAD = _mutation("replyToThread", "ReplyToThreadInput")
CREATE_THREAD_EVENT = _mutation(
    "createThreadEvent",
    "CreateThreadEventInput",
    "threadEvent { id title threadId createdAt { iso8601 } }",
)
UPSERT_THREAD_FIELD = _mutation(
    "upsertThreadField",
    "UpsertThreadFieldInput",
    "result threadField { id key type threadId stringValue booleanValue }",
)
DELETE_THREAD_FIELD = _mutation("deleteThreadField", "DeleteThreadFieldInput")

# =============================================================================
# Customers
# =============================================================================

UPSERT_CUSTOMER = _mutation(
    "upsertCustomer", "UpsertCustomerInput", f"result {_CUSTOMER}", CUSTOMER_FRAGMENT
)
DELETE_CUSTOMER = _mutation("deleteCustomer", "DeleteCustomerInput")
MARK_CUSTOMER_AS_SPAM = _mutation(
    "markCustomerAsSpam", "MarkCustomerAsSpamInput", _CUSTOMER, CUSTOMER_FRAGMENT
)
UNMARK_CUSTOMER_AS_SPAM = _mutation(
    "unmarkCustomerAsSpam", "UnmarkCustomerAsSpamInput", _CUSTOMER, CUSTOMER_FRAGMENT
)
UPDATE_CUSTOMER_COMPANY = _mutation(
    "updateCustomerCompany", "UpdateCustomerCompanyInput", _CUSTOMER, CUSTOMER_FRAGMENT
)
CREATE_CUSTOMER_EVENT = _mutation(
    "createCustomerEvent",
    "CreateCustomerEventInput",
    "customerEvent { id title customerId createdAt { iso8601 } }",
)

# =============================================================================
# Customer Groups
# =============================================================================

CREATE_CUSTOMER_GROUP = _mutation(
    "createCustomerGroup",
    "CreateCustomerGroupInput",
    "customerGroup { ...CustomerGroupParts }",
    CUSTOMER_GROUP_FRAGMENT,
)
ADD_CUSTOMER_TO_CUSTOMER_GROUPS = _mutation(
    "addCustomerToCustomerGroups",
    "AddCustomerToCustomerGroupsInput",
    "customerGroupMemberships { customerId customerGroup { id key name } }",
)
REMOVE_CUSTOMER_FROM_CUSTOMER_GROUPS = _mutation(
    "removeCustomerFromCustomerGroups", "RemoveCustomerFromCustomerGroupsInput"
)

# =============================================================================
# Companies & Tenants
# =============================================================================

UPSERT_COMPANY = _mutation(
    "upsertCompany", "UpsertCompanyInput", "result company { ...CompanyParts }", COMPANY_FRAGMENT
)
UPDATE_COMPANY_TIER = _mutation(
    "updateCompanyTier",
    "UpdateCompanyTierInput",
    "companyTierMembership { id tierId companyId }",
)
UPSERT_TENANT = _mutation(
    "upsertTenant", "UpsertTenantInput", "result tenant { ...TenantParts }", TENANT_FRAGMENT
)
ADD_CUSTOMER_TO_TENANTS = _mutation("addCustomerToTenants", "AddCustomerToTenantsInput")
REMOVE_CUSTOMER_FROM_TENANTS = _mutation(
    "removeCustomerFromTenants", "RemoveCustomerFromTenantsInput"
)
SET_CUSTOMER_TENANTS = _mutation("setCustomerTenants", "SetCustomerTenantsInput")
UPDATE_TENANT_TIER = _mutation(
    "updateTenantTier",
    "UpdateTenantTierInput",
    "tenantTierMembership { id tierId tenantId }",
)

# =============================================================================
# Labels
# =============================================================================

_LABEL_TYPE = "labelType { ...LabelTypeParts }"

CREATE_LABEL_TYPE = _mutation(
    "createLabelType", "CreateLabelTypeInput", _LABEL_TYPE, LABEL_TYPE_FRAGMENT
)
ARCHIVE_LABEL_TYPE = _mutation(
    "archiveLabelType", "ArchiveLabelTypeInput", _LABEL_TYPE, LABEL_TYPE_FRAGMENT
)
UNARCHIVE_LABEL_TYPE = _mutation(
    "unarchiveLabelType", "UnarchiveLabelTypeInput", _LABEL_TYPE, LABEL_TYPE_FRAGMENT
)

# =============================================================================
# Notes & Messaging
# =============================================================================

CREATE_NOTE = _mutation(
    "createNote", "CreateNoteInput", "note { id text markdown createdAt { iso8601 } }"
)
DELETE_NOTE = _mutation("deleteNote", "DeleteNoteInput", "note { id }")
SEND_CHAT = _mutation("sendChat", "SendChatInput", "chat { id text createdAt { iso8601 } }")
SEND_NEW_EMAIL = _mutation(
    "sendNewEmail", "SendNewEmailInput", "email { id subject createdAt { iso8601 } }"
)
REPLY_TO_EMAIL = _mutation(
    "replyToEmail", "ReplyToEmailInput", "email { id subject createdAt { iso8601 } }"
)

# =============================================================================
# Webhooks
# =============================================================================

_WEBHOOK_TARGET = "webhookTarget { ...WebhookTargetParts }"

CREATE_WEBHOOK_TARGET = _mutation(
    "createWebhookTarget", "CreateWebhookTargetInput", _WEBHOOK_TARGET, WEBHOOK_TARGET_FRAGMENT
)
UPDATE_WEBHOOK_TARGET = _mutation(
    "updateWebhookTarget", "UpdateWebhookTargetInput", _WEBHOOK_TARGET, WEBHOOK_TARGET_FRAGMENT
)
DELETE_WEBHOOK_TARGET = _mutation("deleteWebhookTarget", "DeleteWebhookTargetInput")
