"""Local open-source LLM integration package."""

from constructbot.ai.local_llm.client import LocalLLMAdapter
from constructbot.ai.local_llm.config import get_local_llm_settings


def get_local_llm_adapter() -> LocalLLMAdapter:
    """Get a local LLM adapter built from the global settings."""
    return LocalLLMAdapter(settings=get_local_llm_settings())


__all__ = [
    "LocalLLMAdapter",
    "get_local_llm_adapter",
]
