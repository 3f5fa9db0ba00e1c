"""FastAPI router for the construction chat endpoints."""

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from constructbot.chat.constants import EXAMPLE_QUESTIONS
from constructbot.chat.dependencies import get_chat_service
from constructbot.chat.schemas import (
    ChatMessage,
    ChatResponse,
    ExampleQuestionsResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from constructbot.chat.service import ConstructionChatService
from constructbot.conversations.dependencies import get_conversation_store
from constructbot.conversations.exceptions import (
    ConversationBusyError,
    ConversationNotFoundError,
)
from constructbot.conversations.store import ConversationStore
from constructbot.utils.logger import logger

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.get("/welcome", response_model=ChatResponse)
async def get_welcome(
    chat_service: Annotated[ConstructionChatService, Depends(get_chat_service)],
) -> ChatResponse:
    """Return the welcome message shown when a conversation starts."""
    return chat_service.welcome()


@router.get("/examples", response_model=ExampleQuestionsResponse)
async def get_examples() -> ExampleQuestionsResponse:
    """Return example construction questions for the input box."""
    return ExampleQuestionsResponse(questions=EXAMPLE_QUESTIONS)


@router.post("/messages", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    chat_service: Annotated[ConstructionChatService, Depends(get_chat_service)],
    store: Annotated[ConversationStore, Depends(get_conversation_store)],
) -> SendMessageResponse:
    """
    Answer a user message and record the exchange.

    Without a conversation_id the first completed exchange creates a new
    conversation that opens with the welcome message.

    Raises:
        HTTPException: 404 for an unknown conversation, 409 while the
            conversation is still awaiting a previous response
    """
    logger.info(
        "Chat request",
        conversation_id=request.conversation_id,
        message_length=len(request.message),
    )

    try:
        async with store.exchange(request.conversation_id):
            user_message = ChatMessage.from_user(request.message)
            reply = await chat_service.handle(request.message)
            assistant_message = ChatMessage.from_response(reply)

            if request.conversation_id is None:
                welcome = ChatMessage.from_response(chat_service.welcome())
                conversation = store.create([welcome, user_message, assistant_message])
            else:
                conversation = store.append(
                    request.conversation_id, [user_message, assistant_message]
                )
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=e.message)
    except ConversationBusyError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=e.message)

    logger.info(
        "Chat exchange recorded",
        conversation_id=conversation.id,
        source=reply.source.value,
    )

    return SendMessageResponse(
        conversation_id=conversation.id,
        title=conversation.title,
        user_message=user_message,
        assistant_message=assistant_message,
    )
