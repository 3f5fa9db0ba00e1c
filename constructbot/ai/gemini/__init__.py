"""Gemini AI integration package."""

from constructbot.ai.gemini.client import GeminiAdapter
from constructbot.ai.gemini.config import get_gemini_settings


def get_gemini_adapter() -> GeminiAdapter:
    """
    Get a Gemini adapter built from the global settings.

    Returns:
        GeminiAdapter: The configured Gemini adapter
    """
    return GeminiAdapter(settings=get_gemini_settings())


__all__ = [
    "GeminiAdapter",
    "get_gemini_adapter",
]
