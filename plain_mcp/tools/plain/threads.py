"""
Plain thread tools.

Threads are Plain's unit of support work. This module exposes:
- list_threads: one page of threads, enriched with customer names
- get_thread: a thread with its reconstructed conversation timeline
- get_queue_stats: Todo / Snoozed counts
- The thread mutations (assign, snooze, label, reply, ...) as declarative
  operations

Usage:
    tool = ListThreadsTool(client=plain_client)
    result = await tool.execute({"status": "todo", "limit": 10})
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal

from pydantic import Field, model_validator

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.integrations.plain.schemas import (
    MAX_SNOOZE_SECONDS,
    MIN_SNOOZE_SECONDS,
    SnoozeMode,
    Thread,
    ThreadPriority,
    ThreadStatus,
    ThreadStatusFilter,
)
from plain_mcp.integrations.plain.timeline import Timeline, fetch_thread_timeline
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

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown"
QUEUE_STATS_PAGE_SIZE = 100

PRIORITY_DESCRIPTION = "Priority: " + ", ".join(f"{p.value}={p.label}" for p in ThreadPriority)


def priority_field(default: Any = None) -> Any:
    return Field(default, ge=0, le=3, description=PRIORITY_DESCRIPTION)


def text_components(text: str | None) -> list[dict[str, Any]]:
    """Wrap plain text as a single ComponentText, or nothing."""
    if not text:
        return []
    return [{"componentText": {"text": text}}]


# =============================================================================
# Input models
# =============================================================================


class ListThreadsInput(ToolInput):
    status: Literal["todo", "snoozed", "done"] = Field(
        "todo", description="Filter by thread status"
    )
    limit: int = limit_field()
    priority: int | None = priority_field()


class ThreadIdInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")


class ThreadByExternalIdInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="Customer the thread belongs to")
    external_id: str = Field(..., min_length=1, description="Your external ID for the thread")


class CreateThreadInput(ToolInput):
    customer_id: str | None = Field(None, description="Plain customer ID")
    customer_email: str | None = Field(None, description="Customer email address")
    customer_external_id: str | None = Field(None, description="Your external customer ID")
    title: str = Field(..., min_length=1, description="Thread title")
    text: str | None = Field(None, description="Optional first message of the thread")
    priority: int | None = priority_field()
    label_type_ids: list[str] | None = Field(None, description="Label types to attach")

    @model_validator(mode="after")
    def _one_customer(self) -> CreateThreadInput:
        exactly_one(self, "customer_id", "customer_email", "customer_external_id")
        return self


class AssignThreadInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    user_id: str | None = Field(None, description="Assign to this user")
    machine_user_id: str | None = Field(None, description="Assign to this machine user")

    @model_validator(mode="after")
    def _one_assignee(self) -> AssignThreadInput:
        exactly_one(self, "user_id", "machine_user_id")
        return self


class ChangeThreadPriorityInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    priority: int = priority_field(...)


class SnoozeThreadInput(ToolInput):
    """
    Snooze arguments.

    `wait_for_duration` requires `duration_seconds`; `wait_for_customer`
    forbids it.
    """

    thread_id: str = Field(..., min_length=1, description="The thread ID")
    mode: Literal["wait_for_customer", "wait_for_duration"] = Field(
        "wait_for_duration",
        description="Wake up when the customer replies, or after a fixed duration",
    )
    duration_seconds: int | None = Field(
        None,
        ge=MIN_SNOOZE_SECONDS,
        le=MAX_SNOOZE_SECONDS,
        description=(
            f"Snooze duration in seconds ({MIN_SNOOZE_SECONDS}-{MAX_SNOOZE_SECONDS}), "
            "only for wait_for_duration"
        ),
    )

    @model_validator(mode="after")
    def _duration_matches_mode(self) -> SnoozeThreadInput:
        if self.mode == SnoozeMode.WAIT_FOR_DURATION.value and self.duration_seconds is None:
            raise ValueError("duration_seconds is required when mode is wait_for_duration")
        if self.mode == SnoozeMode.WAIT_FOR_CUSTOMER.value and self.duration_seconds is not None:
            raise ValueError("duration_seconds is not allowed when mode is wait_for_customer")
        return self


class UpdateThreadTitleInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    title: str = Field(..., min_length=1, description="New title")


class ChangeThreadCustomerInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    customer_id: str = Field(..., min_length=1, description="Customer to move the thread to")


class AddLabelsInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    label_type_ids: list[str] = Field(..., min_length=1, description="Label types to add")


class RemoveLabelsInput(ToolInput):
    label_ids: list[str] = Field(
        ..., min_length=1, description="Label IDs (not label type IDs) to remove"
    )


class ReplyToThreadInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    text: str = Field(..., min_length=1, description="Reply text")
    markdown: str | None = Field(None, description="Optional markdown version of the reply")


class CreateThreadEventInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    title: str = Field(..., min_length=1, description="Event title")
    text: str | None = Field(None, description="Optional event body")
    external_id: str | None = Field(None, description="Optional external ID for the event")


class UpsertThreadFieldInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    key: str = Field(..., min_length=1, description="Thread field key")
    string_value: str | None = Field(None, description="Value for a string field")
    boolean_value: bool | None = Field(None, description="Value for a boolean field")

    @model_validator(mode="after")
    def _one_value(self) -> UpsertThreadFieldInput:
        exactly_one(self, "string_value", "boolean_value")
        return self


class DeleteThreadFieldInput(ToolInput):
    thread_field_id: str = Field(..., min_length=1, description="The thread field ID")


class UpdateThreadTenantInput(ToolInput):
    thread_id: str = Field(..., min_length=1, description="The thread ID")
    tenant_id: str | None = Field(None, description="Plain tenant ID")
    tenant_external_id: str | None = Field(None, description="Your external tenant ID")

    @model_validator(mode="after")
    def _one_tenant(self) -> UpdateThreadTenantInput:
        exactly_one(self, "tenant_id", "tenant_external_id")
        return self


# =============================================================================
# Custom tools
# =============================================================================


class ListThreadsTool(PlainTool):
    """
    List one page of threads with a status filter.

    Each thread's customer name is looked up concurrently. A failed
    lookup only affects its own row, which falls back to the name or
    email embedded in the thread, then to "Unknown".
    """

    tool_name = "list_threads"
    tool_description = "List support threads with optional status filter"
    tool_title = "List Threads"
    input_model = ListThreadsInput
    read_only = True

    async def run(self, params: ListThreadsInput) -> ToolResult:
        status = ThreadStatusFilter(params.status).to_status()
        result = await self._client.get_threads(
            status, first=params.limit, priority=params.priority
        )
        if not result.success:
            return error_result(result)

        threads: list[Thread] = result.data or []
        names = await asyncio.gather(*(self._customer_name(t) for t in threads))

        return ToolResult.json(
            [
                {
                    "id": thread.id,
                    "title": thread.display_title,
                    "status": thread.status,
                    "priority": thread.priority,
                    "customer": name,
                    "createdAt": thread.created_at.iso8601,
                    "updatedAt": thread.updated_at.iso8601,
                }
                for thread, name in zip(threads, names)
            ]
        )

    async def _customer_name(self, thread: Thread) -> str:
        fallback = (thread.customer and thread.customer.display_name) or UNKNOWN_CUSTOMER
        if thread.customer is None:
            return fallback

        customer_id = thread.customer.id
        try:
            result = await self._client.get_customer_by_id(customer_id)
        except Exception as e:
            logger.warning(f"[{self.name}] Customer lookup for {customer_id} raised: {e}")
            return fallback

        if not result.success:
            logger.warning(
                f"[{self.name}] Customer lookup for {customer_id} failed: "
                f"{result.error.describe()}"
            )
            return fallback
        if result.data is None:
            return fallback

        return result.data.display_name or fallback


class GetThreadTool(PlainTool):
    """Fetch a thread and reconstruct its conversation timeline."""

    tool_name = "get_thread"
    tool_description = "Get detailed thread information including conversation timeline"
    tool_title = "Get Thread"
    input_model = ThreadIdInput
    read_only = True

    async def run(self, params: ThreadIdInput) -> ToolResult:
        result = await self._client.get_thread(params.thread_id)
        if not result.success:
            return error_result(result)
        if result.data is None:
            return ToolResult.error("Thread not found")

        thread: Thread = result.data
        customer = thread.customer

        timeline = Timeline(thread_id=thread.id)
        if customer is not None:
            timeline = await fetch_thread_timeline(self._client, customer.id, thread.id)

        response: dict[str, Any] = {
            "id": thread.id,
            "title": thread.display_title,
            "description": thread.description,
            "status": thread.status,
            "priority": thread.priority,
            "customer": {
                "id": customer.id if customer else None,
                "name": customer.full_name if customer else None,
                "email": customer.email.email if customer and customer.email else None,
            },
            "assignee": (
                {"id": thread.assigned_to.id, "name": thread.assigned_to.full_name}
                if thread.assigned_to
                else None
            ),
            "labels": thread.label_names,
            "createdAt": thread.created_at.iso8601,
            "updatedAt": thread.updated_at.iso8601,
            "timeline": timeline.to_list(),
        }
        if timeline.truncated:
            response["truncated"] = True

        return ToolResult.json(response)


class GetQueueStatsTool(PlainTool):
    """Count Todo and Snoozed threads (first page of each, up to 100)."""

    tool_name = "get_queue_stats"
    tool_description = "Get a quick overview of the support queue with counts by status"
    tool_title = "Queue Stats"
    read_only = True

    async def run(self, params: Any) -> ToolResult:
        todo, snoozed = await asyncio.gather(
            self._count(ThreadStatus.TODO),
            self._count(ThreadStatus.SNOOZED),
        )
        return ToolResult.json(
            {
                "todo": todo,
                "snoozed": snoozed,
                "summary": f"{todo} threads need attention (Todo), {snoozed} snoozed",
            }
        )

    async def _count(self, status: ThreadStatus) -> int:
        result = await self._client.get_threads(status, first=QUEUE_STATS_PAGE_SIZE)
        if not result.success:
            logger.warning(
                f"[{self.name}] Could not count {status.value} threads: "
                f"{result.error.describe()}"
            )
            return 0
        return len(result.data or [])


# =============================================================================
# Declarative operations
# =============================================================================


def _customer_identifier(p: CreateThreadInput) -> dict[str, str]:
    if p.customer_id is not None:
        return {"customerId": p.customer_id}
    if p.customer_email is not None:
        return {"emailAddress": p.customer_email}
    return {"externalId": p.customer_external_id}


def _tenant_identifier(p: UpdateThreadTenantInput) -> dict[str, str]:
    if p.tenant_id is not None:
        return {"tenantId": p.tenant_id}
    return {"externalId": p.tenant_external_id}


def _thread_input(p: Any) -> dict[str, Any]:
    return {"input": {"threadId": p.thread_id}}


_thread = pick("thread")

THREAD_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="get_thread_by_external_id",
        description="Get a thread by the external ID you assigned to it",
        title="Get Thread by External ID",
        document=queries.THREAD_BY_EXTERNAL_ID,
        root="threadByExternalId",
        input_model=ThreadByExternalIdInput,
        variables=lambda p: {"customerId": p.customer_id, "externalId": p.external_id},
        not_found="Thread not found",
        read_only=True,
    ),
    PlainOperation(
        name="create_thread",
        description="Create a new support thread for a customer",
        title="Create Thread",
        document=mutations.CREATE_THREAD,
        root="createThread",
        input_model=CreateThreadInput,
        variables=lambda p: {
            "input": compact(
                {
                    "customerIdentifier": _customer_identifier(p),
                    "title": p.title,
                    "components": text_components(p.text) or None,
                    "priority": p.priority,
                    "labelTypeIds": p.label_type_ids,
                }
            )
        },
        select=_thread,
    ),
    PlainOperation(
        name="assign_thread",
        description="Assign a thread to a user or machine user",
        title="Assign Thread",
        document=mutations.ASSIGN_THREAD,
        root="assignThread",
        input_model=AssignThreadInput,
        variables=lambda p: {
            "input": compact(
                {"threadId": p.thread_id, "userId": p.user_id, "machineUserId": p.machine_user_id}
            )
        },
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="unassign_thread",
        description="Remove the assignee from a thread",
        title="Unassign Thread",
        document=mutations.UNASSIGN_THREAD,
        root="unassignThread",
        input_model=ThreadIdInput,
        variables=_thread_input,
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="change_thread_priority",
        description=f"Change a thread's priority. {PRIORITY_DESCRIPTION}",
        title="Change Thread Priority",
        document=mutations.CHANGE_THREAD_PRIORITY,
        root="changeThreadPriority",
        input_model=ChangeThreadPriorityInput,
        variables=lambda p: {"input": {"threadId": p.thread_id, "priority": p.priority}},
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="mark_thread_as_done",
        description="Mark a thread as done",
        title="Mark Thread as Done",
        document=mutations.MARK_THREAD_AS_DONE,
        root="markThreadAsDone",
        input_model=ThreadIdInput,
        variables=_thread_input,
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="mark_thread_as_todo",
        description="Move a thread back to Todo",
        title="Mark Thread as Todo",
        document=mutations.MARK_THREAD_AS_TODO,
        root="markThreadAsTodo",
        input_model=ThreadIdInput,
        variables=_thread_input,
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="snooze_thread",
        description=(
            "Snooze a thread until the customer replies (mode=wait_for_customer) "
            "or for a fixed number of seconds (mode=wait_for_duration)"
        ),
        title="Snooze Thread",
        document=mutations.SNOOZE_THREAD,
        root="snoozeThread",
        input_model=SnoozeThreadInput,
        variables=lambda p: {
            "input": compact(
                {
                    "threadId": p.thread_id,
                    "statusDetail": SnoozeMode(p.mode).status_detail,
                    "durationSeconds": p.duration_seconds,
                }
            )
        },
        select=_thread,
    ),
    PlainOperation(
        name="update_thread_title",
        description="Change a thread's title",
        title="Update Thread Title",
        document=mutations.UPDATE_THREAD_TITLE,
        root="updateThreadTitle",
        input_model=UpdateThreadTitleInput,
        variables=lambda p: {"input": {"threadId": p.thread_id, "title": p.title}},
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="change_thread_customer",
        description="Move a thread to a different customer",
        title="Change Thread Customer",
        document=mutations.CHANGE_THREAD_CUSTOMER,
        root="changeThreadCustomer",
        input_model=ChangeThreadCustomerInput,
        variables=lambda p: {"input": {"threadId": p.thread_id, "customerId": p.customer_id}},
        select=_thread,
        idempotent=True,
    ),
    PlainOperation(
        name="add_labels",
        description="Add labels to a thread by label type ID",
        title="Add Labels",
        document=mutations.ADD_LABELS,
        root="addLabels",
        input_model=AddLabelsInput,
        variables=lambda p: {
            "input": {"threadId": p.thread_id, "labelTypeIds": p.label_type_ids}
        },
        select=pick("labels"),
    ),
    PlainOperation(
        name="remove_labels",
        description="Remove labels from a thread by label ID",
        title="Remove Labels",
        document=mutations.REMOVE_LABELS,
        root="removeLabels",
        input_model=RemoveLabelsInput,
        variables=lambda p: {"input": {"labelIds": p.label_ids}},
        done_message="Labels removed",
        destructive=True,
    ),
    PlainOperation(
        name="reply_to_thread",
        description="Reply to a thread on the channel the customer last used",
        title="Reply to Thread",
        document=mutations.REPLY_TO_THREAD,
        root="replyToThread",
        input_model=ReplyToThreadInput,
        variables=lambda p: {
            "input": compact(
                {"threadId": p.thread_id, "textContent": p.text, "markdownContent": p.markdown}
            )
        },
        done_message="Reply sent",
    ),
    PlainOperation(
        name="create_thread_event",
        description="Add a custom event to a thread's timeline",
        title="Create Thread Event",
        document=mutations.CREATE_THREAD_EVENT,
        root="createThreadEvent",
        input_model=CreateThreadEventInput,
        variables=lambda p: {
            "input": compact(
                {
                    "threadId": p.thread_id,
                    "title": p.title,
                    "components": text_components(p.text),
                    "externalId": p.external_id,
                }
            )
        },
        select=pick("threadEvent"),
    ),
    PlainOperation(
        name="upsert_thread_field",
        description="Create or update a custom field value on a thread",
        title="Upsert Thread Field",
        document=mutations.UPSERT_THREAD_FIELD,
        root="upsertThreadField",
        input_model=UpsertThreadFieldInput,
        variables=lambda p: {
            "input": compact(
                {
                    "threadId": p.thread_id,
                    "key": p.key,
                    "type": "BOOL" if p.boolean_value is not None else "STRING",
                    "stringValue": p.string_value,
                    "booleanValue": p.boolean_value,
                }
            )
        },
        idempotent=True,
    ),
    PlainOperation(
        name="delete_thread_field",
        description="Delete a custom field value from a thread",
        title="Delete Thread Field",
        document=mutations.DELETE_THREAD_FIELD,
        root="deleteThreadField",
        input_model=DeleteThreadFieldInput,
        variables=lambda p: {"input": {"threadFieldId": p.thread_field_id}},
        done_message="Thread field deleted",
        destructive=True,
        idempotent=True,
    ),
    PlainOperation(
        name="update_thread_tenant",
        description="Set the tenant a thread belongs to",
        title="Update Thread Tenant",
        document=mutations.UPDATE_THREAD_TENANT,
        root="updateThreadTenant",
        input_model=UpdateThreadTenantInput,
        variables=lambda p: {
            "input": {"threadId": p.thread_id, "tenantIdentifier": _tenant_identifier(p)}
        },
        select=_thread,
        idempotent=True,
    ),
)

THREAD_TOOLS: tuple[type[PlainTool], ...] = (ListThreadsTool, GetThreadTool, GetQueueStatsTool)
