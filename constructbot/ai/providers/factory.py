"""Factory for creating response source adapters."""

from enum import Enum

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.utils.logger import logger


class AdapterType(str, Enum):
    """Available response source adapter types."""

    LOCAL = "local"
    GEMINI = "gemini"


def create_adapter(adapter_type: AdapterType | str) -> ResponseSourceAdapter:
    """Create a response source adapter instance.

    Args:
        adapter_type: Type of adapter to create

    Returns:
        ResponseSourceAdapter: Instance of the specified adapter

    Raises:
        ValueError: If adapter type is not supported
    """
    if isinstance(adapter_type, str):
        adapter_type = AdapterType(adapter_type.strip().lower())

    logger.info(f"Creating response source adapter: {adapter_type.value}")

    if adapter_type == AdapterType.LOCAL:
        from constructbot.ai.local_llm import get_local_llm_adapter

        return get_local_llm_adapter()
    elif adapter_type == AdapterType.GEMINI:
        from constructbot.ai.gemini import get_gemini_adapter

        return get_gemini_adapter()
    else:
        raise ValueError(f"Unsupported adapter type: {adapter_type}")
