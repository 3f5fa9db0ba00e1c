"""
Pydantic schemas for conversations.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from constructbot.chat.schemas import ChatMessage


class Conversation(BaseModel):
    """A conversation and its ordered messages."""

    id: str = Field(..., description="Conversation UUID")
    title: str = Field(..., description="Title derived from the first user message")
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(..., description="When the conversation was created")
    last_activity: datetime = Field(..., description="When the last exchange was appended")


class ConversationResponse(Conversation):
    """Response model for a single conversation."""

    awaiting_response: bool = Field(
        False, description="Whether a request is currently outstanding"
    )


class ConversationSummary(BaseModel):
    """Sidebar entry for a conversation."""

    id: str
    title: str
    created_at: datetime
    last_activity: datetime
    message_count: int
    awaiting_response: bool = False


class ConversationListResponse(BaseModel):
    """Response model for the list of conversations."""

    conversations: list[ConversationSummary] = Field(..., description="Newest first")
    total: int = Field(..., description="Total number of conversations")
