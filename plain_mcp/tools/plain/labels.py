"""Plain label type tools. Labels on threads are managed in threads.py."""

from __future__ import annotations

from pydantic import Field

from plain_mcp.integrations.plain import mutations, queries
from plain_mcp.tools.plain.base import PlainOperation, ToolInput, compact, limit_field, pick


class ListLabelTypesInput(ToolInput):
    limit: int = limit_field()
    include_archived: bool = Field(False, description="Also return archived label types")


class LabelTypeIdInput(ToolInput):
    label_type_id: str = Field(..., min_length=1, description="The label type ID")


class CreateLabelTypeInput(ToolInput):
    name: str = Field(..., min_length=1, description="Label name")
    icon: str | None = Field(None, description="Optional emoji or icon name")
    external_id: str | None = Field(None, description="Optional external ID")


_label_type = pick("labelType")

LABEL_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="list_label_types",
        description="List the label types that can be added to threads",
        title="List Label Types",
        document=queries.LABEL_TYPES,
        root="labelTypes",
        input_model=ListLabelTypesInput,
        variables=lambda p: {
            "filters": None if p.include_archived else {"isArchived": False},
            "first": p.limit,
        },
        read_only=True,
    ),
    PlainOperation(
        name="get_label_type",
        description="Get a label type by ID",
        title="Get Label Type",
        document=queries.LABEL_TYPE,
        root="labelType",
        input_model=LabelTypeIdInput,
        variables=lambda p: {"labelTypeId": p.label_type_id},
        not_found="Label type not found",
        read_only=True,
    ),
    PlainOperation(
        name="create_label_type",
        description="Create a label type",
        title="Create Label Type",
        document=mutations.CREATE_LABEL_TYPE,
        root="createLabelType",
        input_model=CreateLabelTypeInput,
        variables=lambda p: {
            "input": compact({"name": p.name, "icon": p.icon, "externalId": p.external_id})
        },
        select=_label_type,
    ),
    PlainOperation(
        name="archive_label_type",
        description="Archive a label type so it can no longer be added to threads",
        title="Archive Label Type",
        document=mutations.ARCHIVE_LABEL_TYPE,
        root="archiveLabelType",
        input_model=LabelTypeIdInput,
        variables=lambda p: {"input": {"labelTypeId": p.label_type_id}},
        select=_label_type,
        idempotent=True,
    ),
    PlainOperation(
        name="unarchive_label_type",
        description="Restore an archived label type",
        title="Unarchive Label Type",
        document=mutations.UNARCHIVE_LABEL_TYPE,
        root="unarchiveLabelType",
        input_model=LabelTypeIdInput,
        variables=lambda p: {"input": {"labelTypeId": p.label_type_id}},
        select=_label_type,
        idempotent=True,
    ),
)
