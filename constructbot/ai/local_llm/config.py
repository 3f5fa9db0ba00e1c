"""
Configuration for the local (Ollama-compatible) LLM integration.

Leaving ``LOCAL_LLM_BASE_URL`` empty means no local backend is wired up,
in which case the primary source always declines.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constructbot.utils.logger import logger


class LocalLLMSettings(BaseSettings):
    """Configuration for the local LLM server using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="LOCAL_LLM_"
    )

    base_url: str = Field(
        default="", description="Base URL of the local LLM server, e.g. http://localhost:11434"
    )
    model_name: str = Field(default="llama3", description="Model served locally")
    timeout: int = Field(default=60, description="Request timeout in seconds")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url.strip())


_local_llm_settings: LocalLLMSettings | None = None


def get_local_llm_settings() -> LocalLLMSettings:
    """
    Get the global local LLM settings instance.

    Returns:
        LocalLLMSettings: The global settings instance
    """
    global _local_llm_settings
    if _local_llm_settings is None:
        _local_llm_settings = LocalLLMSettings()
        logger.info(
            "Local LLM settings loaded",
            configured=_local_llm_settings.is_configured,
        )
    return _local_llm_settings


def set_local_llm_settings(settings: LocalLLMSettings) -> None:
    """
    Set the global local LLM settings instance.

    Args:
        settings: The settings to set
    """
    global _local_llm_settings
    _local_llm_settings = settings
