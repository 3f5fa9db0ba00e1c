"""Tests for the construction chat service fallback chain."""

import asyncio

import pytest

from constructbot.chat.constants import (
    EXHAUSTED_MESSAGE,
    INTERNAL_ERROR_MESSAGE,
    MIN_VIABLE_RESPONSE_LENGTH,
    SCOPE_MESSAGE,
    PromptTarget,
    ResponseSource,
)
from constructbot.chat.prompts import build_prompt
from constructbot.chat.service import ConstructionChatService, SourceSlot, is_viable

IN_DOMAIN = "What slump value should I use for M25 grade concrete?"
ANSWER = (
    "For M25 concrete placed by hand, a slump of 75-100 mm is typical; pumped "
    "concrete usually needs 100-150 mm. Adjust with admixtures rather than extra "
    "water to keep the water-cement ratio within IS 456 limits."
)


def test_viability_threshold():
    """Test that only text longer than the threshold is viable."""
    assert not is_viable(None)
    assert not is_viable("")
    assert not is_viable("x" * MIN_VIABLE_RESPONSE_LENGTH)
    assert is_viable("x" * (MIN_VIABLE_RESPONSE_LENGTH + 1))


class TestDomainGate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "What's the weather today?"])
    async def test_out_of_domain_never_calls_sources(
        self, chat_service, primary, secondary, query
    ):
        """Test out-of-domain queries are rejected without touching any adapter."""
        primary.result = ANSWER
        secondary.result = ANSWER

        response = await chat_service.handle(query)

        assert response.source == ResponseSource.DOMAIN_REJECTED
        assert response.content == SCOPE_MESSAGE
        assert primary.prompts == []
        assert secondary.prompts == []

    @pytest.mark.asyncio
    async def test_non_text_query_rejected(self, chat_service, primary):
        """Test that non-string input is rejected rather than raising."""
        response = await chat_service.handle(None)

        assert response.source == ResponseSource.DOMAIN_REJECTED
        assert primary.prompts == []


class TestFallbackChain:
    @pytest.mark.asyncio
    async def test_primary_success_skips_secondary(self, chat_service, primary, secondary):
        """Test a viable primary answer is returned verbatim."""
        primary.result = ANSWER
        secondary.result = "should never be used, it is long enough"

        response = await chat_service.handle(IN_DOMAIN)

        assert response.source == ResponseSource.PRIMARY_MODEL
        assert response.content == ANSWER
        assert len(primary.prompts) == 1
        assert secondary.prompts == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("primary_result", [None, "", "too short", "x" * 20])
    async def test_insufficient_primary_falls_back_to_secondary(
        self, chat_service, primary, secondary, primary_result
    ):
        """Test that a null or short primary answer moves on to the secondary."""
        primary.result = primary_result
        secondary.result = ANSWER

        response = await chat_service.handle(IN_DOMAIN)

        assert response.source == ResponseSource.SECONDARY_MODEL
        assert response.content == ANSWER
        assert len(secondary.prompts) == 1

    @pytest.mark.asyncio
    async def test_secondary_scenario_with_200_char_answer(
        self, chat_service, primary, secondary
    ):
        """Test the M25 concrete scenario with a 200-character secondary answer."""
        answer = ("Use a slump of 75-100 mm for M25. " * 10)[:200]
        assert len(answer) == 200
        primary.result = None
        secondary.result = answer

        response = await chat_service.handle(IN_DOMAIN)

        assert response.content == answer
        assert response.source == ResponseSource.SECONDARY_MODEL

    @pytest.mark.asyncio
    async def test_each_source_gets_its_own_prompt(self, chat_service, primary, secondary):
        """Test that prompts are built per target, not shared."""
        secondary.result = ANSWER

        await chat_service.handle(IN_DOMAIN)

        assert primary.prompts == [build_prompt(IN_DOMAIN, PromptTarget.PRIMARY)]
        assert secondary.prompts == [build_prompt(IN_DOMAIN, PromptTarget.SECONDARY)]
        assert primary.prompts[0] != secondary.prompts[0]

    @pytest.mark.asyncio
    async def test_both_sources_exhausted(self, chat_service, primary, secondary):
        """Test the exhaustion message when neither source answers."""
        response = await chat_service.handle(IN_DOMAIN)

        assert response.source == ResponseSource.EXHAUSTED_FALLBACK
        assert response.content == EXHAUSTED_MESSAGE
        assert len(primary.prompts) == 1
        assert len(secondary.prompts) == 1

    @pytest.mark.asyncio
    async def test_longer_chain_stops_at_first_viable(self, make_adapter):
        """Test an arbitrary ordered chain with early exit."""
        first = make_adapter("first")
        second = make_adapter("second", result=ANSWER)
        third = make_adapter("third", result=ANSWER)
        service = ConstructionChatService(
            [
                SourceSlot(first, PromptTarget.PRIMARY, ResponseSource.PRIMARY_MODEL),
                SourceSlot(second, PromptTarget.SECONDARY, ResponseSource.SECONDARY_MODEL),
                SourceSlot(third, PromptTarget.SECONDARY, ResponseSource.SECONDARY_MODEL),
            ]
        )

        response = await service.handle(IN_DOMAIN)

        assert response.content == ANSWER
        assert third.prompts == []


class TestInternalErrors:
    @pytest.mark.asyncio
    async def test_adapter_exception_becomes_internal_error(
        self, chat_service, primary, secondary
    ):
        """Test that a raising adapter yields a generic internal-error reply."""
        primary.error = RuntimeError("socket exploded: secret-token-123")

        response = await chat_service.handle(IN_DOMAIN)

        assert response.source == ResponseSource.INTERNAL_ERROR
        assert response.content == INTERNAL_ERROR_MESSAGE
        assert "secret-token-123" not in response.content
        assert response.error == "socket exploded: secret-token-123"
        assert secondary.prompts == []

    @pytest.mark.asyncio
    async def test_error_detail_is_not_serialized(self, chat_service, primary):
        """Test that the diagnostic detail never reaches the payload."""
        primary.error = ValueError("internal detail")

        response = await chat_service.handle(IN_DOMAIN)

        assert "error" not in response.model_dump()
        assert "internal detail" not in response.model_dump_json()

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, chat_service, primary):
        """Test that caller cancellation is not swallowed."""
        primary.error = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await chat_service.handle(IN_DOMAIN)


class TestWelcome:
    def test_welcome_is_stable(self, chat_service, primary):
        """Test repeated welcome calls differ only in timestamp."""
        first = chat_service.welcome()
        second = chat_service.welcome()

        assert first.source == ResponseSource.WELCOME
        assert first.content == second.content
        assert first.source == second.source
        assert first.content
        assert primary.prompts == []


@pytest.mark.asyncio
async def test_aclose_closes_adapters(chat_service, primary, secondary):
    """Test that closing the service closes each adapter."""
    await chat_service.aclose()

    assert primary.closed
    assert secondary.closed
