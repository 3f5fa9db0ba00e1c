"""
Pydantic schemas for chat messages and exchanges.

This module contains the immutable message model shared with the
conversation store, the orchestrator's reply model, and the request and
response bodies of the chat endpoints.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constructbot.chat.constants import MAX_MESSAGE_LENGTH, ChatRole, ResponseSource


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ========== Core Schemas ==========


class ChatResponse(BaseModel):
    """Reply produced by the orchestrator for one query."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Assistant message text (markdown)")
    source: ResponseSource = Field(..., description="Which path produced the reply")
    timestamp: datetime = Field(default_factory=utc_now)
    error: str | None = Field(
        default=None,
        exclude=True,
        description="Diagnostic detail for internal errors; never serialized",
    )


class ChatMessage(BaseModel):
    """A single message in a conversation.

    Assistant messages always carry a source tag; user messages never do.
    """

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str
    source: ResponseSource | None = None
    timestamp: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def check_source_matches_role(self) -> "ChatMessage":
        if self.role == ChatRole.ASSISTANT and self.source is None:
            raise ValueError("assistant messages require a source")
        if self.role == ChatRole.USER and self.source is not None:
            raise ValueError("user messages cannot have a source")
        return self

    @classmethod
    def from_user(cls, content: str) -> "ChatMessage":
        return cls(role=ChatRole.USER, content=content)

    @classmethod
    def from_response(cls, response: ChatResponse) -> "ChatMessage":
        return cls(
            role=ChatRole.ASSISTANT,
            content=response.content,
            source=response.source,
            timestamp=response.timestamp,
        )


# ========== Endpoint Schemas ==========


class SendMessageRequest(BaseModel):
    """Request model for sending a user message."""

    message: str = Field(
        ..., max_length=MAX_MESSAGE_LENGTH, description="The user's question"
    )
    conversation_id: str | None = Field(
        default=None,
        description="Conversation to append to; omit to start a new one",
    )


class SendMessageResponse(BaseModel):
    """Response model for a completed exchange."""

    conversation_id: str = Field(..., description="Conversation the exchange was stored in")
    title: str = Field(..., description="Conversation title")
    user_message: ChatMessage
    assistant_message: ChatMessage


class ExampleQuestionsResponse(BaseModel):
    """Response model for the example question list."""

    questions: list[str]
