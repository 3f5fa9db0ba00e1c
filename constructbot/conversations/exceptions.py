"""Exceptions raised by the conversation store."""


class ConversationError(Exception):
    """Base exception for conversation store errors."""

    def __init__(self, conversation_id: str, message: str) -> None:
        super().__init__(message)
        self.conversation_id = conversation_id
        self.message = message


class ConversationNotFoundError(ConversationError):
    """Raised when a conversation id is unknown."""

    def __init__(self, conversation_id: str) -> None:
        super().__init__(conversation_id, f"Conversation {conversation_id} not found")


class ConversationBusyError(ConversationError):
    """Raised when a conversation already has a request awaiting a response."""

    def __init__(self, conversation_id: str) -> None:
        super().__init__(
            conversation_id,
            f"Conversation {conversation_id} is already awaiting a response",
        )
