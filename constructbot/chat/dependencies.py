"""
FastAPI dependencies for the chat feature.
"""

from constructbot.ai.providers import create_adapter
from constructbot.chat.service import ConstructionChatService
from constructbot.config import get_app_settings
from constructbot.utils.logger import logger

_chat_service: ConstructionChatService | None = None


def get_chat_service() -> ConstructionChatService:
    """
    Get or create the chat service singleton.

    The fallback chain is built from PRIMARY_SOURCE then SECONDARY_SOURCE.

    Returns:
        ConstructionChatService: The chat service instance
    """
    global _chat_service
    if _chat_service is None:
        settings = get_app_settings()
        _chat_service = ConstructionChatService.from_adapters(
            primary=create_adapter(settings.primary_source),
            secondary=create_adapter(settings.secondary_source),
        )
        logger.info(
            "Initialized ConstructionChatService",
            primary=settings.primary_source.value,
            secondary=settings.secondary_source.value,
        )
    return _chat_service


async def close_chat_service() -> None:
    """Close the singleton's adapters, if it was ever created."""
    global _chat_service
    if _chat_service is not None:
        await _chat_service.aclose()
        _chat_service = None
