"""
FastAPI dependencies for conversations.
"""

from constructbot.conversations.store import ConversationStore

_conversation_store: ConversationStore | None = None


def get_conversation_store() -> ConversationStore:
    """
    Get or create the process-wide conversation store.

    Returns:
        ConversationStore: The store instance
    """
    global _conversation_store
    if _conversation_store is None:
        _conversation_store = ConversationStore()
    return _conversation_store
