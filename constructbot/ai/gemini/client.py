"""Gemini response source adapter."""

import asyncio
from typing import Any

from google import genai
from google.genai import errors, types

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.ai.gemini.config import GeminiSettings
from constructbot.ai.gemini.exceptions import (
    GeminiAuthenticationError,
    GeminiContentGenerationError,
    GeminiError,
)
from constructbot.utils.logger import logger


class GeminiAdapter(ResponseSourceAdapter):
    """Async adapter for the Gemini generation API.

    Sends one single-turn, non-streaming request per prompt and reads the
    text of the first candidate. Every failure is logged and resolved to
    ``None``.
    """

    name = "gemini"

    def __init__(self, settings: GeminiSettings) -> None:
        """Initialize Gemini adapter.

        Args:
            settings: Gemini settings instance with API configuration
        """
        self.settings = settings
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.settings.api_key)
                logger.info("Gemini client initialized")
            except Exception as e:
                logger.error("Failed to initialize Gemini client", error=str(e))
                raise GeminiAuthenticationError(f"Failed to authenticate: {e}")
        return self._client

    async def close(self) -> None:
        """Close the Gemini client's async transport."""
        if self._client is not None:
            await self._client.aio.aclose()
            self._client = None

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Pull ``candidates[0].content.parts[0].text`` out of a reply."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            raise GeminiContentGenerationError("Reply contained no candidates")

        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        text = getattr(parts[0], "text", None) if parts else None
        if not isinstance(text, str) or not text.strip():
            raise GeminiContentGenerationError("First candidate has no text")

        return text.strip()

    async def _request(self, prompt: str) -> str:
        client = self._get_client()
        logger.info(
            "Generating content with model",
            model_name=self.settings.model_name,
            prompt_length=len(prompt),
        )

        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.settings.model_name,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=self.settings.temperature
                    ),
                ),
                timeout=self.settings.timeout,
            )
        except errors.APIError as e:
            raise GeminiError(f"Content generation failed: {e}", status_code=e.code)

        return self._extract_text(response)

    async def generate(self, prompt: str) -> str | None:
        if not self.settings.is_configured:
            logger.warning("Gemini API key not configured, skipping source")
            return None

        try:
            text = await self._request(prompt)
        except asyncio.TimeoutError:
            logger.error("Gemini request timed out", timeout=self.settings.timeout)
            return None
        except GeminiError as e:
            logger.error(
                "Gemini generation failed",
                error=e.message,
                status_code=e.status_code,
            )
            return None
        except Exception as e:
            logger.error(
                "Unexpected Gemini failure",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        logger.info("Gemini response received", length=len(text))
        return text
