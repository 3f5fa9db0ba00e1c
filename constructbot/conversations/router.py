"""
Conversation router with endpoints for listing, reading and discarding
conversations. Exchanges are appended by the chat router.
"""

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from constructbot.conversations.dependencies import get_conversation_store
from constructbot.conversations.exceptions import ConversationNotFoundError
from constructbot.conversations.schemas import (
    ConversationListResponse,
    ConversationResponse,
)
from constructbot.conversations.store import ConversationStore

router = APIRouter(prefix="/conversations", tags=["Conversations"])

StoreDep = Annotated[ConversationStore, Depends(get_conversation_store)]


@router.get("", response_model=ConversationListResponse)
async def list_conversations(store: StoreDep) -> ConversationListResponse:
    """
    List conversations, most recently created first.

    Returns:
        ConversationListResponse: Conversation summaries
    """
    summaries = store.summaries()
    return ConversationListResponse(conversations=summaries, total=len(summaries))


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(conversation_id: str, store: StoreDep) -> ConversationResponse:
    """
    Get a conversation with all of its messages.

    Raises:
        HTTPException: 404 if the conversation does not exist
    """
    try:
        conversation = store.get(conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=e.message)

    return ConversationResponse(
        **conversation.model_dump(exclude={"messages"}),
        messages=conversation.messages,
        awaiting_response=store.is_awaiting_response(conversation_id),
    )


@router.delete("/{conversation_id}", status_code=HTTPStatus.NO_CONTENT)
async def delete_conversation(conversation_id: str, store: StoreDep) -> Response:
    """
    Discard a conversation.

    Raises:
        HTTPException: 404 if the conversation does not exist
    """
    try:
        store.delete(conversation_id)
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=e.message)

    return Response(status_code=HTTPStatus.NO_CONTENT)
