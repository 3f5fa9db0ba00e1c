"""Tests for the chat API routes."""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from constructbot.ai.base import ResponseSourceAdapter
from constructbot.chat.constants import EXAMPLE_QUESTIONS, MAX_MESSAGE_LENGTH
from constructbot.chat.dependencies import get_chat_service
from constructbot.chat.schemas import ChatMessage
from constructbot.chat.service import ConstructionChatService
from constructbot.conversations.dependencies import get_conversation_store
from constructbot.conversations.store import ConversationStore
from constructbot.main import app

ANSWER = "Use a slump of 75-100 mm for hand-placed M25 concrete, per IS 456."


@pytest.fixture
def store():
    return ConversationStore()


@pytest.fixture
def client(chat_service, store):
    """Create a test client wired to the fake adapters and a fresh store."""
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_conversation_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestChatRoutes:
    def test_welcome(self, client):
        """Test the welcome endpoint returns the welcome tag."""
        response = client.get("/api/chat/welcome")

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "welcome"
        assert data["content"]
        assert "timestamp" in data

    def test_examples(self, client):
        """Test the example question list."""
        response = client.get("/api/chat/examples")

        assert response.status_code == 200
        assert response.json()["questions"] == EXAMPLE_QUESTIONS

    def test_first_message_creates_conversation(self, client, secondary, store):
        """Test the first exchange creates a conversation opening with the welcome."""
        secondary.result = ANSWER

        response = client.post(
            "/api/chat/messages",
            json={"message": "What slump for M25 grade concrete?"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user_message"]["role"] == "user"
        assert data["user_message"]["source"] is None
        assert data["assistant_message"]["role"] == "assistant"
        assert data["assistant_message"]["source"] == "secondary-model"
        assert data["assistant_message"]["content"] == ANSWER

        conversation = store.get(data["conversation_id"])
        assert data["title"] == conversation.title
        assert [m.source.value if m.source else None for m in conversation.messages] == [
            "welcome",
            None,
            "secondary-model",
        ]

    def test_follow_up_appends_to_conversation(self, client, primary, store):
        """Test that a conversation_id appends the exchange."""
        primary.result = ANSWER
        first = client.post("/api/chat/messages", json={"message": "concrete curing time"})
        conversation_id = first.json()["conversation_id"]

        second = client.post(
            "/api/chat/messages",
            json={"message": "And for steel?", "conversation_id": conversation_id},
        )

        assert second.status_code == 200
        assert second.json()["conversation_id"] == conversation_id
        assert len(store.get(conversation_id).messages) == 5

    def test_out_of_domain_message(self, client, primary, secondary):
        """Test that an off-topic message comes back domain-rejected."""
        response = client.post(
            "/api/chat/messages", json={"message": "What's the weather today?"}
        )

        assert response.status_code == 200
        assert response.json()["assistant_message"]["source"] == "domain-rejected"
        assert primary.prompts == []
        assert secondary.prompts == []

    def test_empty_message_is_domain_rejected(self, client, store):
        """Test that empty text is accepted and rejected by the guard."""
        response = client.post("/api/chat/messages", json={"message": ""})

        assert response.status_code == 200
        data = response.json()
        assert data["assistant_message"]["source"] == "domain-rejected"
        assert data["title"] == "New Conversation"

    def test_internal_error_hides_detail(self, client, primary):
        """Test that adapter failures never leak into the payload."""
        primary.error = RuntimeError("credential=abc123")

        response = client.post("/api/chat/messages", json={"message": "concrete"})

        assert response.status_code == 200
        message = response.json()["assistant_message"]
        assert message["source"] == "internal-error"
        assert "abc123" not in response.text
        assert "error" not in message

    def test_unknown_conversation(self, client):
        """Test that appending to an unknown conversation is a 404."""
        response = client.post(
            "/api/chat/messages",
            json={"message": "concrete", "conversation_id": "missing"},
        )

        assert response.status_code == 404

    def test_message_too_long(self, client):
        """Test that messages over the input limit are rejected."""
        response = client.post(
            "/api/chat/messages", json={"message": "a" * (MAX_MESSAGE_LENGTH + 1)}
        )

        assert response.status_code == 422


async def wait_until_busy(store: ConversationStore, conversation_id: str) -> None:
    while not store.is_awaiting_response(conversation_id):
        await asyncio.sleep(0)


class BlockingAdapter(ResponseSourceAdapter):
    """Adapter that holds each generation open until released."""

    name = "blocking"

    def __init__(self):
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, prompt: str) -> str | None:
        self.entered.set()
        await self.release.wait()
        return ANSWER


class TestConcurrentRequests:
    @pytest.fixture
    def blocking(self):
        return BlockingAdapter()

    @pytest.fixture
    def async_client(self, blocking, make_adapter, store):
        service = ConstructionChatService.from_adapters(
            primary=blocking, secondary=make_adapter("secondary")
        )
        app.dependency_overrides[get_chat_service] = lambda: service
        app.dependency_overrides[get_conversation_store] = lambda: store
        yield httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        )
        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_second_request_while_awaiting_reply_conflicts(
        self, async_client, blocking, store
    ):
        """Test that a conversation accepts one outstanding request at a time."""
        conversation = store.create([ChatMessage.from_user("brick masonry")])

        async with async_client as client:
            first = asyncio.create_task(
                client.post(
                    "/api/chat/messages",
                    json={"message": "mortar mix?", "conversation_id": conversation.id},
                )
            )
            await asyncio.wait_for(blocking.entered.wait(), timeout=5)
            assert store.is_awaiting_response(conversation.id)

            second = await client.post(
                "/api/chat/messages",
                json={"message": "and plaster?", "conversation_id": conversation.id},
            )

            blocking.release.set()
            first_response = await asyncio.wait_for(first, timeout=5)

        assert second.status_code == 409
        assert first_response.status_code == 200
        assert first_response.json()["assistant_message"]["source"] == "primary-model"
        assert not store.is_awaiting_response(conversation.id)
        assert len(store.get(conversation.id).messages) == 3

    @pytest.mark.asyncio
    async def test_other_conversations_are_not_blocked(
        self, async_client, blocking, store
    ):
        """Test that the busy guard is per conversation."""
        busy = store.create([ChatMessage.from_user("concrete")])
        idle = store.create([ChatMessage.from_user("steel")])

        async with async_client as client:
            first = asyncio.create_task(
                client.post(
                    "/api/chat/messages",
                    json={"message": "curing time?", "conversation_id": busy.id},
                )
            )
            await asyncio.wait_for(blocking.entered.wait(), timeout=5)

            second = asyncio.create_task(
                client.post(
                    "/api/chat/messages",
                    json={"message": "rebar spacing?", "conversation_id": idle.id},
                )
            )
            await asyncio.wait_for(wait_until_busy(store, idle.id), timeout=5)

            blocking.release.set()
            responses = await asyncio.wait_for(asyncio.gather(first, second), timeout=5)

        assert [r.status_code for r in responses] == [200, 200]
