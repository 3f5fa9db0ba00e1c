"""Local LLM response source adapter (Ollama-compatible REST API)."""

import httpx

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.ai.local_llm.config import LocalLLMSettings
from constructbot.ai.local_llm.exceptions import (
    LocalLLMConnectionError,
    LocalLLMError,
    LocalLLMResponseError,
    LocalLLMServerError,
)
from constructbot.utils.logger import logger

GENERATE_ENDPOINT = "/api/generate"


class LocalLLMAdapter(ResponseSourceAdapter):
    """Async adapter for a locally hosted open-source model.

    When no base URL is configured the adapter declines every prompt without
    touching the network.
    """

    name = "local"

    def __init__(self, settings: LocalLLMSettings) -> None:
        self.settings = settings
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.timeout,
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _make_request(self, prompt: str) -> dict:
        """POST one non-streaming generation request.

        Raises:
            LocalLLMError: For transport failures, error statuses and bad bodies
        """
        await self._ensure_client()
        payload = {
            "model": self.settings.model_name,
            "prompt": prompt,
            "stream": False,
        }

        try:
            response = await self._client.post(GENERATE_ENDPOINT, json=payload)
        except httpx.TimeoutException as e:
            raise LocalLLMConnectionError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise LocalLLMConnectionError(f"Request error: {e}") from e

        if not response.is_success:
            raise LocalLLMServerError(
                f"Unexpected status: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LocalLLMResponseError(f"Invalid JSON body: {e}") from e

        if not isinstance(data, dict):
            raise LocalLLMResponseError("Reply body is not a JSON object")
        return data

    async def generate(self, prompt: str) -> str | None:
        if not self.settings.is_configured:
            logger.info("Local LLM not configured, deferring to next source")
            return None

        try:
            data = await self._make_request(prompt)
        except LocalLLMError as e:
            logger.error(
                "Local LLM call failed", error=e.message, status_code=e.status_code
            )
            return None

        text = data.get("response")
        if not isinstance(text, str) or not text.strip():
            logger.warning("Local LLM returned no text")
            return None

        logger.info("Local LLM response received", length=len(text))
        return text.strip()
