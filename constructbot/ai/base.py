"""Base class for response source adapters."""

from abc import ABC, abstractmethod


class ResponseSourceAdapter(ABC):
    """Abstract base class for a single text-generation source.

    An adapter wraps exactly one external generation call. Failures are part
    of the contract: a transport error, a non-2xx reply, a malformed payload or
    an unconfigured backend all resolve to ``None`` so that callers can move on
    to the next source without handling exceptions.
    """

    name: str = "adapter"

    @abstractmethod
    async def generate(self, prompt: str) -> str | None:
        """Generate text for a fully built prompt.

        Args:
            prompt: The prompt to send to the backend

        Returns:
            str | None: Generated text, or None when the source has nothing usable
        """
        pass

    async def close(self) -> None:
        """Release any network resources held by the adapter."""
        return None
