"""Shared fixtures for chat tests."""

import pytest

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.chat.service import ConstructionChatService


class RecordingAdapter(ResponseSourceAdapter):
    """Adapter double that returns a canned result and records every prompt."""

    def __init__(self, name: str, result: str | None = None, error: Exception | None = None):
        self.name = name
        self.result = result
        self.error = error
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_adapter():
    """Factory for recording adapters."""

    def _make(name: str = "fake", result: str | None = None, error: Exception | None = None):
        return RecordingAdapter(name, result=result, error=error)

    return _make


@pytest.fixture
def primary(make_adapter):
    return make_adapter("primary")


@pytest.fixture
def secondary(make_adapter):
    return make_adapter("secondary")


@pytest.fixture
def chat_service(primary, secondary):
    return ConstructionChatService.from_adapters(primary=primary, secondary=secondary)
