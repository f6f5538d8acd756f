"""
Pydantic schemas for the Plain API.

These schemas provide type-safe representations of the Plain resources
the adapter reshapes itself (threads, customers). Everything else is
passed through `simplify()` as plain JSON.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class ThreadStatus(str, Enum):
    """Thread status as Plain reports it."""

    TODO = "TODO"
    SNOOZED = "SNOOZED"
    DONE = "DONE"


class ThreadStatusFilter(str, Enum):
    """Tool-facing status filter, mapped 1:1 onto ThreadStatus."""

    TODO = "todo"
    SNOOZED = "snoozed"
    DONE = "done"

    def to_status(self) -> ThreadStatus:
        return _STATUS_FILTER_MAP.get(self, ThreadStatus.TODO)


_STATUS_FILTER_MAP = {
    ThreadStatusFilter.TODO: ThreadStatus.TODO,
    ThreadStatusFilter.SNOOZED: ThreadStatus.SNOOZED,
    ThreadStatusFilter.DONE: ThreadStatus.DONE,
}


class ThreadPriority(IntEnum):
    """Thread priority ordinal. Lower is more urgent."""

    URGENT = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3

    @property
    def label(self) -> str:
        return self.name.lower()


def priority_name(value: int) -> str:
    """
    Map a priority ordinal to its name.

    Raises:
        ValueError: If value is not one of 0-3
    """
    try:
        return ThreadPriority(value).label
    except ValueError:
        raise ValueError(f"Invalid priority {value!r}: expected 0-3") from None


class SnoozeMode(str, Enum):
    """How a snoozed thread wakes up."""

    WAIT_FOR_CUSTOMER = "wait_for_customer"
    WAIT_FOR_DURATION = "wait_for_duration"

    @property
    def status_detail(self) -> str:
        """Plain `statusDetail` value sent with snoozeThread."""
        return "WAITING_FOR_" + self.name.removeprefix("WAIT_FOR_")


# Snooze durations, in seconds
MIN_SNOOZE_SECONDS = 60
MAX_SNOOZE_SECONDS = 5_184_000  # 60 days


# =============================================================================
# Response Schemas
# =============================================================================


class DateTime(BaseModel):
    """Plain DateTime object."""

    model_config = ConfigDict(extra="ignore")

    iso8601: str


class EmailAddress(BaseModel):
    """Customer email address."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    email: str | None = None
    is_verified: bool | None = Field(None, alias="isVerified")


class CustomerRef(BaseModel):
    """Customer as embedded in a thread."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    full_name: str | None = Field(None, alias="fullName")
    email: EmailAddress | None = None

    @property
    def display_name(self) -> str | None:
        if self.full_name:
            return self.full_name
        if self.email and self.email.email:
            return self.email.email
        return None


class Customer(BaseModel):
    """Plain customer representation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    full_name: str | None = Field(None, alias="fullName")
    short_name: str | None = Field(None, alias="shortName")
    external_id: str | None = Field(None, alias="externalId")
    email: EmailAddress | None = None
    created_at: DateTime | None = Field(None, alias="createdAt")
    updated_at: DateTime | None = Field(None, alias="updatedAt")

    @property
    def display_name(self) -> str | None:
        if self.full_name:
            return self.full_name
        if self.email and self.email.email:
            return self.email.email
        return None

    def to_dict(self) -> dict[str, Any]:
        """Flat, display-oriented representation."""
        return {
            "id": self.id,
            "fullName": self.full_name,
            "shortName": self.short_name,
            "email": self.email.email if self.email else None,
            "externalId": self.external_id,
            "createdAt": self.created_at.iso8601 if self.created_at else None,
            "updatedAt": self.updated_at.iso8601 if self.updated_at else None,
        }


class LabelType(BaseModel):
    """Label type referenced by a thread label."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str


class Label(BaseModel):
    """Label attached to a thread."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    label_type: LabelType = Field(..., alias="labelType")


class Assignee(BaseModel):
    """User or machine user a thread is assigned to."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    full_name: str | None = Field(None, alias="fullName")


class Thread(BaseModel):
    """Plain thread representation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    external_id: str | None = Field(None, alias="externalId")
    title: str | None = None
    description: str | None = None
    status: str
    priority: int | None = None
    customer: CustomerRef | None = None
    assigned_to: Assignee | None = Field(None, alias="assignedTo")
    labels: list[Label] | None = None
    created_at: DateTime = Field(..., alias="createdAt")
    updated_at: DateTime = Field(..., alias="updatedAt")

    @property
    def display_title(self) -> str:
        return self.title or NO_TITLE

    @property
    def label_names(self) -> list[str]:
        return [label.label_type.name for label in self.labels or []]


NO_TITLE = "(no title)"
