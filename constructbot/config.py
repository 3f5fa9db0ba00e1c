from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from constructbot.ai.providers.factory import AdapterType


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    client_base_url: str = Field(
        default="http://localhost:3000", description="Frontend base URL"
    )

    # Fallback chain, tried in this order
    primary_source: AdapterType = Field(
        default=AdapterType.LOCAL,
        description="Adapter type answering first (local or gemini)",
    )
    secondary_source: AdapterType = Field(
        default=AdapterType.GEMINI,
        description="Adapter type answering when the primary source declines",
    )

    @field_validator("primary_source", "secondary_source", mode="before")
    @classmethod
    def normalize_source(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings) -> None:
    """Override the global app settings (used by tests)."""
    global _app_settings
    _app_settings = settings


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url
