"""
Construction chat service.

Routes a user query through the domain guard and an ordered chain of
response sources, tagging the reply with the path that produced it:

    rejected by the guard      -> domain-rejected (no source is called)
    first viable generation    -> that slot's tag (primary-model, secondary-model)
    every source declined      -> exhausted-fallback
    anything unexpected        -> internal-error
"""

from dataclasses import dataclass

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.chat.constants import (
    EXHAUSTED_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    MIN_VIABLE_RESPONSE_LENGTH,
    SCOPE_MESSAGE,
    WELCOME_MESSAGE,
    PromptTarget,
    ResponseSource,
)
from constructbot.chat.domain_guard import is_construction_query
from constructbot.chat.prompts import build_prompt
from constructbot.chat.schemas import ChatResponse
from constructbot.utils.logger import logger


@dataclass(frozen=True)
class SourceSlot:
    """One step of the fallback chain."""

    adapter: ResponseSourceAdapter
    target: PromptTarget
    source: ResponseSource


def is_viable(text: str | None) -> bool:
    """Check whether a generation is long enough to show to the user."""
    return text is not None and len(text) > MIN_VIABLE_RESPONSE_LENGTH


class ConstructionChatService:
    """Service answering construction questions through a fallback chain."""

    def __init__(self, chain: list[SourceSlot]) -> None:
        """Initialize the chat service.

        Args:
            chain: Response sources in the order they should be tried
        """
        self.chain = list(chain)

    @classmethod
    def from_adapters(
        cls,
        primary: ResponseSourceAdapter,
        secondary: ResponseSourceAdapter,
    ) -> "ConstructionChatService":
        """Build the standard primary -> secondary chain."""
        return cls(
            [
                SourceSlot(primary, PromptTarget.PRIMARY, ResponseSource.PRIMARY_MODEL),
                SourceSlot(
                    secondary, PromptTarget.SECONDARY, ResponseSource.SECONDARY_MODEL
                ),
            ]
        )

    def welcome(self) -> ChatResponse:
        """Return the introductory message shown at conversation start."""
        return ChatResponse(content=WELCOME_MESSAGE, source=ResponseSource.WELCOME)

    async def handle(self, query: str) -> ChatResponse:
        """
        Answer one user query.

        Never raises for ordinary failures; the reply is always a complete
        assistant message tagged with its source.

        Args:
            query: The user's raw question

        Returns:
            ChatResponse: Reply content, source tag and timestamp
        """
        try:
            return await self._route(query)
        except Exception as e:
            logger.exception(
                "Unhandled error while processing chat message",
                error=str(e),
                error_type=type(e).__name__,
            )
            return ChatResponse(
                content=INTERNAL_ERROR_MESSAGE,
                source=ResponseSource.INTERNAL_ERROR,
                error=str(e),
            )

    async def _route(self, query: str) -> ChatResponse:
        if not is_construction_query(query):
            logger.info("Query rejected by domain guard")
            return ChatResponse(
                content=SCOPE_MESSAGE, source=ResponseSource.DOMAIN_REJECTED
            )

        logger.info("Query passed domain check", query_length=len(query))

        for slot in self.chain:
            # Each source gets its own prompt
            prompt = build_prompt(query, slot.target)
            result = await slot.adapter.generate(prompt)

            if is_viable(result):
                logger.info(
                    "Response accepted",
                    adapter=slot.adapter.name,
                    source=slot.source.value,
                    length=len(result),
                )
                return ChatResponse(content=result, source=slot.source)

            logger.info(
                "Source returned null or insufficient response, trying next",
                adapter=slot.adapter.name,
                length=len(result) if result is not None else None,
            )

        logger.warning("All response sources exhausted")
        return ChatResponse(
            content=EXHAUSTED_MESSAGE, source=ResponseSource.EXHAUSTED_FALLBACK
        )

    async def aclose(self) -> None:
        """Close every adapter in the chain."""
        for slot in self.chain:
            await slot.adapter.close()
