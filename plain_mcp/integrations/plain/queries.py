"""
GraphQL fragments and read queries for the Plain API.

Each document is a complete GraphQL operation: the fragments it spreads
are appended to it, so documents can be sent as-is.

API Reference:
    https://www.plain.com/docs/graphql/introduction
"""

from __future__ import annotations

# =============================================================================
# Fragments
# =============================================================================

MUTATION_ERROR_FRAGMENT = """
fragment MutationErrorParts on MutationError {
  message
  type
  code
  fields { field message type }
}
"""

CUSTOMER_FRAGMENT = """
fragment CustomerParts on Customer {
  id
  fullName
  shortName
  externalId
  email { email isVerified }
  company { id name domainName }
  markedAsSpamAt { iso8601 }
  createdAt { iso8601 }
  updatedAt { iso8601 }
}
"""

THREAD_FRAGMENT = """
fragment ThreadParts on Thread {
  id
  externalId
  title
  description
  previewText
  status
  statusChangedAt { iso8601 }
  statusDetail { __typename }
  priority
  customer { id fullName email { email } }
  assignedTo {
    __typename
    ... on User { id fullName email }
    ... on MachineUser { id fullName }
  }
  labels { id labelType { id name } }
  tenant { id name externalId }
  createdAt { iso8601 }
  updatedAt { iso8601 }
}
"""

COMPANY_FRAGMENT = """
fragment CompanyParts on Company {
  id
  name
  domainName
  createdAt { iso8601 }
  updatedAt { iso8601 }
}
"""

TENANT_FRAGMENT = """
fragment TenantParts on Tenant {
  id
  name
  externalId
  url
  createdAt { iso8601 }
  updatedAt { iso8601 }
}
"""

CUSTOMER_GROUP_FRAGMENT = """
fragment CustomerGroupParts on CustomerGroup {
  id
  name
  key
  color
  externalId
  createdAt { iso8601 }
}
"""

LABEL_TYPE_FRAGMENT = """
fragment LabelTypeParts on LabelType {
  id
  name
  icon
  externalId
  isArchived
  archivedAt { iso8601 }
  createdAt { iso8601 }
}
"""

USER_FRAGMENT = """
fragment UserParts on User {
  id
  fullName
  publicName
  email
  status
  createdAt { iso8601 }
}
"""

TIER_FRAGMENT = """
fragment TierParts on Tier {
  id
  name
  externalId
  color
  isDefault
  createdAt { iso8601 }
}
"""

WEBHOOK_TARGET_FRAGMENT = """
fragment WebhookTargetParts on WebhookTarget {
  id
  url
  description
  isEnabled
  eventSubscriptions { eventType }
  createdAt { iso8601 }
  updatedAt { iso8601 }
}
"""

# =============================================================================
# Threads
# =============================================================================

THREADS = (
    """
query threads($filters: ThreadsFilter, $first: Int) {
  threads(filters: $filters, first: $first) {
    edges { node { ...ThreadParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + THREAD_FRAGMENT
)

THREAD = (
    """
query thread($threadId: ID!) {
  thread(threadId: $threadId) { ...ThreadParts }
}
"""
    + THREAD_FRAGMENT
)

THREAD_BY_EXTERNAL_ID = (
    """
query threadByExternalId($customerId: ID!, $externalId: ID!) {
  threadByExternalId(customerId: $customerId, externalId: $externalId) { ...ThreadParts }
}
"""
    + THREAD_FRAGMENT
)

# Text fields are aliased per variant: ChatEntry.text and NoteEntry.text
# differ in nullability and would otherwise conflict in one selection set.
TIMELINE_ENTRIES = """
query timelineEntries($customerId: ID!, $first: Int) {
  timelineEntries(customerId: $customerId, first: $first) {
    edges {
      node {
        id
        threadId
        timestamp { iso8601 }
        actor {
          __typename
          ... on UserActor { user { fullName email } }
          ... on CustomerActor { customer { fullName email { email } } }
          ... on SystemActor { systemActorType }
          ... on MachineUserActor { machineUser { fullName } }
        }
        entry {
          __typename
          ... on ChatEntry { chatId chatText: text }
          ... on EmailEntry {
            emailId
            subject
            textContent
            from { email name }
            to { email name }
          }
          ... on NoteEntry { noteId noteText: text }
          ... on CustomEntry {
            title
            components {
              __typename
              ... on ComponentText { componentText: text }
            }
          }
        }
      }
    }
    pageInfo { hasNextPage }
  }
}
"""

# =============================================================================
# Customers
# =============================================================================

CUSTOMER = (
    """
query customer($customerId: ID!) {
  customer(customerId: $customerId) { ...CustomerParts }
}
"""
    + CUSTOMER_FRAGMENT
)

CUSTOMER_BY_EMAIL = (
    """
query customerByEmail($email: String!) {
  customerByEmail(email: $email) { ...CustomerParts }
}
"""
    + CUSTOMER_FRAGMENT
)

CUSTOMER_BY_EXTERNAL_ID = (
    """
query customerByExternalId($externalId: ID!) {
  customerByExternalId(externalId: $externalId) { ...CustomerParts }
}
"""
    + CUSTOMER_FRAGMENT
)

CUSTOMERS = (
    """
query customers($first: Int) {
  customers(first: $first) {
    edges { node { ...CustomerParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + CUSTOMER_FRAGMENT
)

CUSTOMER_GROUPS = (
    """
query customerGroups($first: Int) {
  customerGroups(first: $first) {
    edges { node { ...CustomerGroupParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + CUSTOMER_GROUP_FRAGMENT
)

CUSTOMER_GROUP = (
    """
query customerGroup($customerGroupId: ID!) {
  customerGroup(customerGroupId: $customerGroupId) { ...CustomerGroupParts }
}
"""
    + CUSTOMER_GROUP_FRAGMENT
)

# =============================================================================
# Companies & Tenants
# =============================================================================

COMPANIES = (
    """
query companies($first: Int) {
  companies(first: $first) {
    edges { node { ...CompanyParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + COMPANY_FRAGMENT
)

COMPANY = (
    """
query company($companyId: ID!) {
  company(companyId: $companyId) { ...CompanyParts }
}
"""
    + COMPANY_FRAGMENT
)

TENANTS = (
    """
query tenants($first: Int) {
  tenants(first: $first) {
    edges { node { ...TenantParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + TENANT_FRAGMENT
)

TENANT = (
    """
query tenant($tenantId: ID!) {
  tenant(tenantId: $tenantId) { ...TenantParts }
}
"""
    + TENANT_FRAGMENT
)

SEARCH_TENANTS = (
    """
query searchTenants($searchQuery: TenantsSearchQuery!, $first: Int) {
  searchTenants(searchQuery: $searchQuery, first: $first) {
    edges { node { tenant { ...TenantParts } } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + TENANT_FRAGMENT
)

# =============================================================================
# Labels
# =============================================================================

LABEL_TYPES = (
    """
query labelTypes($filters: LabelTypeFilter, $first: Int) {
  labelTypes(filters: $filters, first: $first) {
    edges { node { ...LabelTypeParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + LABEL_TYPE_FRAGMENT
)

LABEL_TYPE = (
    """
query labelType($labelTypeId: ID!) {
  labelType(labelTypeId: $labelTypeId) { ...LabelTypeParts }
}
"""
    + LABEL_TYPE_FRAGMENT
)

# =============================================================================
# Workspace, Users, Tiers, Webhooks
# =============================================================================

MY_WORKSPACE = """
query myWorkspace {
  myWorkspace {
    id
    name
    publicName
    isDemoWorkspace
    createdAt { iso8601 }
  }
}
"""

MY_USER = (
    """
query myUser {
  myUser { ...UserParts }
}
"""
    + USER_FRAGMENT
)

USERS = (
    """
query users($first: Int) {
  users(first: $first) {
    edges { node { ...UserParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + USER_FRAGMENT
)

USER_BY_EMAIL = (
    """
query userByEmail($email: String!) {
  userByEmail(email: $email) { ...UserParts }
}
"""
    + USER_FRAGMENT
)

TIERS = (
    """
query tiers($first: Int) {
  tiers(first: $first) {
    edges { node { ...TierParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + TIER_FRAGMENT
)

TIER = (
    """
query tier($tierId: ID!) {
  tier(tierId: $tierId) { ...TierParts }
}
"""
    + TIER_FRAGMENT
)

WEBHOOK_TARGETS = (
    """
query webhookTargets($first: Int) {
  webhookTargets(first: $first) {
    edges { node { ...WebhookTargetParts } }
    pageInfo { hasNextPage endCursor }
  }
}
"""
    + WEBHOOK_TARGET_FRAGMENT
)

WEBHOOK_TARGET = (
    """
query webhookTarget($webhookTargetId: ID!) {
  webhookTarget(webhookTargetId: $webhookTargetId) { ...WebhookTargetParts }
}
"""
    + WEBHOOK_TARGET_FRAGMENT
)
