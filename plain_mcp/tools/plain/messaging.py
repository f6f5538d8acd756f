"""
Plain note and messaging tools.

Notes are internal and never reach the customer. Chats and emails are
delivered to the customer by Plain.
"""

from __future__ import annotations

from pydantic import Field

from plain_mcp.integrations.plain import mutations
from plain_mcp.tools.plain.base import PlainOperation, ToolInput, compact, pick


class CreateNoteInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    text: str = Field(..., min_length=1, description="Note text")
    thread_id: str | None = Field(None, description="Attach the note to this thread")
    markdown: str | None = Field(None, description="Optional markdown version of the note")


class NoteIdInput(ToolInput):
    note_id: str = Field(..., min_length=1, description="The note ID")


class SendChatInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    text: str = Field(..., min_length=1, description="Chat message")
    thread_id: str | None = Field(None, description="Send within this thread")


class SendNewEmailInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    subject: str = Field(..., min_length=1, description="Email subject")
    text: str = Field(..., min_length=1, description="Plain-text body")
    thread_id: str | None = Field(None, description="Send within this thread")
    markdown: str | None = Field(None, description="Optional markdown body")


class ReplyToEmailInput(ToolInput):
    customer_id: str = Field(..., min_length=1, description="The customer ID")
    in_reply_to_email_id: str = Field(..., min_length=1, description="Email being replied to")
    text: str = Field(..., min_length=1, description="Plain-text body")
    markdown: str | None = Field(None, description="Optional markdown body")


_email = pick("email")

MESSAGING_OPERATIONS: tuple[PlainOperation, ...] = (
    PlainOperation(
        name="create_note",
        description="Add an internal note for a customer, optionally on a thread",
        title="Create Note",
        document=mutations.CREATE_NOTE,
        root="createNote",
        input_model=CreateNoteInput,
        variables=lambda p: {
            "input": compact(
                {
                    "customerId": p.customer_id,
                    "threadId": p.thread_id,
                    "text": p.text,
                    "markdown": p.markdown,
                }
            )
        },
        select=pick("note"),
    ),
    PlainOperation(
        name="delete_note",
        description="Delete an internal note",
        title="Delete Note",
        document=mutations.DELETE_NOTE,
        root="deleteNote",
        input_model=NoteIdInput,
        variables=lambda p: {"input": {"noteId": p.note_id}},
        select=pick("note"),
        destructive=True,
        idempotent=True,
    ),
    PlainOperation(
        name="send_chat",
        description="Send a chat message to a customer",
        title="Send Chat",
        document=mutations.SEND_CHAT,
        root="sendChat",
        input_model=SendChatInput,
        variables=lambda p: {
            "input": compact({"customerId": p.customer_id, "threadId": p.thread_id, "text": p.text})
        },
        select=pick("chat"),
    ),
    PlainOperation(
        name="send_new_email",
        description="Send a new email to a customer",
        title="Send New Email",
        document=mutations.SEND_NEW_EMAIL,
        root="sendNewEmail",
        input_model=SendNewEmailInput,
        variables=lambda p: {
            "input": compact(
                {
                    "customerId": p.customer_id,
                    "threadId": p.thread_id,
                    "subject": p.subject,
                    "textContent": p.text,
                    "markdownContent": p.markdown,
                }
            )
        },
        select=_email,
    ),
    PlainOperation(
        name="reply_to_email",
        description="Reply to an email from a customer",
        title="Reply to Email",
        document=mutations.REPLY_TO_EMAIL,
        root="replyToEmail",
        input_model=ReplyToEmailInput,
        variables=lambda p: {
            "input": compact(
                {
                    "customerId": p.customer_id,
                    "inReplyToEmailId": p.in_reply_to_email_id,
                    "textContent": p.text,
                    "markdownContent": p.markdown,
                }
            )
        },
        select=_email,
    ),
)
