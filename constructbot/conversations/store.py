"""
In-memory conversation store.

Conversations live for the lifetime of the process. The store only appends
messages; it never edits or removes individual messages.
"""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from constructbot.chat.constants import ChatRole
from constructbot.chat.schemas import ChatMessage, utc_now
from constructbot.conversations.exceptions import (
    ConversationBusyError,
    ConversationNotFoundError,
)
from constructbot.conversations.schemas import Conversation, ConversationSummary
from constructbot.utils.logger import logger

DEFAULT_TITLE = "New Conversation"
MAX_TITLE_LENGTH = 50
MAX_TITLE_WORDS = 4
TITLE_TERMS = (
    "concrete",
    "steel",
    "construction",
    "building",
    "project",
    "safety",
    "materials",
    "cost",
    "design",
    "engineering",
)


def generate_conversation_title(first_message: str | None) -> str:
    """Create a short sidebar title from the first user message.

    Keeps words that mention a construction term or are longer than four
    characters; falls back to the start of the message when none qualify.
    """
    if not first_message:
        return DEFAULT_TITLE

    words = first_message.lower().split(" ")
    relevant = [
        word
        for word in words
        if len(word) > 4 or any(term in word for term in TITLE_TERMS)
    ]

    if relevant:
        return " ".join(relevant[:MAX_TITLE_WORDS])[:MAX_TITLE_LENGTH]

    return first_message[:MAX_TITLE_LENGTH]


class ConversationStore:
    """Process-local store of conversations keyed by id."""

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._in_flight: set[str] = set()

    @staticmethod
    def _snapshot(conversation: Conversation) -> Conversation:
        return conversation.model_copy(update={"messages": list(conversation.messages)})

    def _require(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    def create(self, messages: list[ChatMessage]) -> Conversation:
        """Create a conversation from the messages of its first exchange."""
        first_user = next(
            (message.content for message in messages if message.role == ChatRole.USER),
            None,
        )
        now = utc_now()
        conversation = Conversation(
            id=str(uuid.uuid4()),
            title=generate_conversation_title(first_user),
            messages=list(messages),
            created_at=now,
            last_activity=now,
        )
        self._conversations[conversation.id] = conversation

        logger.info(
            "Conversation created",
            conversation_id=conversation.id,
            message_count=len(messages),
        )
        return self._snapshot(conversation)

    def append(self, conversation_id: str, messages: list[ChatMessage]) -> Conversation:
        """Append messages and bump ``last_activity``.

        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        conversation = self._require(conversation_id)
        conversation.messages.extend(messages)
        conversation.last_activity = utc_now()
        return self._snapshot(conversation)

    def get(self, conversation_id: str) -> Conversation:
        """
        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        return self._snapshot(self._require(conversation_id))

    def list_conversations(self) -> list[Conversation]:
        """All conversations, most recently created first."""
        return [self._snapshot(c) for c in reversed(self._conversations.values())]

    def summaries(self) -> list[ConversationSummary]:
        return [
            ConversationSummary(
                id=conversation.id,
                title=conversation.title,
                created_at=conversation.created_at,
                last_activity=conversation.last_activity,
                message_count=len(conversation.messages),
                awaiting_response=self.is_awaiting_response(conversation.id),
            )
            for conversation in self.list_conversations()
        ]

    def delete(self, conversation_id: str) -> None:
        """
        Raises:
            ConversationNotFoundError: If the conversation does not exist
        """
        self._require(conversation_id)
        del self._conversations[conversation_id]
        logger.info("Conversation deleted", conversation_id=conversation_id)

    def is_awaiting_response(self, conversation_id: str) -> bool:
        return conversation_id in self._in_flight

    @asynccontextmanager
    async def exchange(self, conversation_id: str | None) -> AsyncIterator[None]:
        """Hold a conversation busy for the duration of one request.

        A new conversation (``None``) has nothing to guard.

        Raises:
            ConversationNotFoundError: If the conversation does not exist
            ConversationBusyError: If another request is still outstanding
        """
        if conversation_id is None:
            yield
            return

        self._require(conversation_id)
        if conversation_id in self._in_flight:
            raise ConversationBusyError(conversation_id)

        self._in_flight.add(conversation_id)
        try:
            yield
        finally:
            self._in_flight.discard(conversation_id)
