"""Plain workspace, user, tier and webhook tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.tools.plain.base import NoInput, PlainOperation, ToolInput, limit_field, pick


class ListInput(ToolInput):
    limit: int = limit_field()


class UserByEmailInput(ToolInput):
    email: str = Field(..., min_length=1, description="The user's email address")


class TierIdInput(ToolInput):
    tier_id: str = Field(..., min_length=1, description="The tier ID")


class WebhookTargetIdInput(ToolInput):
    webhook_target_id: str = Field(..., min_length=1, description="The webhook target ID")


class CreateWebhookTargetInput(ToolInput):
    url: str = Field(..., min_length=1, description="HTTPS URL that receives events")
    description: str = Field(..., min_length=1, description="What this webhook is for")
    event_types: list[str] = Field(
        ..., min_length=1, description="Event types to subscribe to, e.g. thread.thread_created"
    )
    is_enabled: bool = Field(True, description="Start delivering events immediately")


class UpdateWebhookTargetInput(ToolInput):
    webhook_target_id: str = Field(..., min_length=1, description="The webhook target ID")
    url: str | None = Field(None, description="New URL")
    description: str | None = Field(None, description="New description")
    event_types: list[str] | None = Field(None, description="Replacement event type list")
    is_enabled: bool | None = Field(None, description="Enable or disable delivery")

    @model_validator(mode="after")
    def _has_change(self) -> UpdateWebhookTargetInput:
        if all(
            value is None
            for value in (self.url, self.description, self.event_types, self.is_enabled)
        ):
            raise ValueError("Provide at least one of: url, description, event_types, is_enabled")
        return self


def _subscriptions(event_types: list[str]) -> list[dict[str, str]]:
    return [{"eventType": event_type} for event_type in event_types]


def _update_webhook_variables(p: UpdateWebhookTargetInput) -> dict[str, Any]:
    updates: dict[str, Any] = {"webhookTargetId": p.webhook_target_id}
    if p.url is not None:
        updates["url"] = {"value": p.url}
    if p.description is not None:
        updates["description"] = {"value": p.description}
    if p.event_types is not None:
        updates["eventSubscriptions"] = {"value": _subscriptions(p.event_types)}
    if p.is_enabled is not None:
        updates["isEnabled"] = {"value": p.is_enabled}
    return {"input": updates}


_webhook_target = pick("webhookTarget")

WORKSPACE_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="get_workspace",
        description="Get the workspace this API key belongs to",
        title="Get Workspace",
        document=queries.MY_WORKSPACE,
        root="myWorkspace",
        input_model=NoInput,
        read_only=True,
    ),
    PlainOperation(
        name="get_my_user",
        description="Get the user or machine user this API key acts as",
        title="Get My User",
        document=queries.MY_USER,
        root="myUser",
        read_only=True,
    ),
    PlainOperation(
        name="list_users",
        description="List workspace users (support agents)",
        title="List Users",
        document=queries.USERS,
        root="users",
        input_model=ListInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_user_by_email",
        description="Get a workspace user by email",
        title="Get User by Email",
        document=queries.USER_BY_EMAIL,
        root="userByEmail",
        input_model=UserByEmailInput,
        variables=lambda p: {"email": p.email},
        not_found="No user found with that email",
        read_only=True,
    ),
    PlainOperation(
        name="list_tiers",
        description="List tiers",
        title="List Tiers",
        document=queries.TIERS,
        root="tiers",
        input_model=ListInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_tier",
        description="Get a tier by ID",
        title="Get Tier",
        document=queries.TIER,
        root="tier",
        input_model=TierIdInput,
        variables=lambda p: {"tierId": p.tier_id},
        not_found="Tier not found",
        read_only=True,
    ),
    PlainOperation(
        name="list_webhook_targets",
        description="List webhook targets",
        title="List Webhook Targets",
        document=queries.WEBHOOK_TARGETS,
        root="webhookTargets",
        input_model=ListInput,
        variables=lambda p: {"first": p.limit},
        read_only=True,
    ),
    PlainOperation(
        name="get_webhook_target",
        description="Get a webhook target by ID",
        title="Get Webhook Target",
        document=queries.WEBHOOK_TARGET,
        root="webhookTarget",
        input_model=WebhookTargetIdInput,
        variables=lambda p: {"webhookTargetId": p.webhook_target_id},
        not_found="Webhook target not found",
        read_only=True,
    ),
    PlainOperation(
        name="create_webhook_target",
        description="Create a webhook target subscribed to the given event types",
        title="Create Webhook Target",
        document=mutations.CREATE_WEBHOOK_TARGET,
        root="createWebhookTarget",
        input_model=CreateWebhookTargetInput,
        variables=lambda p: {
            "input": {
                "url": p.url,
                "description": p.description,
                "eventSubscriptions": _subscriptions(p.event_types),
                "isEnabled": p.is_enabled,
            }
        },
        select=_webhook_target,
    ),
    PlainOperation(
        name="update_webhook_target",
        description="Update a webhook target's URL, description, events or enabled state",
        title="Update Webhook Target",
        document=mutations.UPDATE_WEBHOOK_TARGET,
        root="updateWebhookTarget",
        input_model=UpdateWebhookTargetInput,
        variables=_update_webhook_variables,
        select=_webhook_target,
        idempotent=True,
    ),
    PlainOperation(
        name="delete_webhook_target",
        description="Delete a webhook target",
        title="Delete Webhook Target",
        document=mutations.DELETE_WEBHOOK_TARGET,
        root="deleteWebhookTarget",
        input_model=WebhookTargetIdInput,
        variables=lambda p: {"input": {"webhookTargetId": p.webhook_target_id}},
        done_message="Webhook target deleted",
        destructive=True,
        idempotent=True,
    ),
)
