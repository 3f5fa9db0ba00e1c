"""
Configuration management for the Gemini integration package.

The API key is read from the server environment only; it is never sent
to the browser.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constructbot.utils.logger import logger


class GeminiSettings(BaseSettings):
    """Configuration for Gemini integration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="GEMINI_"
    )

    api_key: str = Field(
        default="", description="Gemini API key; empty disables the adapter"
    )
    model_name: str = Field(
        default="gemini-2.5-flash", description="Gemini model name to use"
    )
    temperature: float = Field(
        default=0.7, description="Temperature for content generation (0.0-1.0)"
    )
    timeout: int = Field(default=60, description="Request timeout in seconds")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())


_gemini_settings: GeminiSettings | None = None


def get_gemini_settings() -> GeminiSettings:
    """
    Get the global Gemini settings instance.

    Returns:
        GeminiSettings: The global settings instance
    """
    global _gemini_settings
    if _gemini_settings is None:
        _gemini_settings = GeminiSettings()
        logger.info(
            "Gemini settings loaded",
            model_name=_gemini_settings.model_name,
            configured=_gemini_settings.is_configured,
        )
    return _gemini_settings


def set_gemini_settings(settings: GeminiSettings) -> None:
    """
    Set the global Gemini settings instance.

    Args:
        settings: The settings to set
    """
    global _gemini_settings
    _gemini_settings = settings
