"""Conversations API: list, get, start, and append/list messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.schemas.conversation import (
    ConversationListResponse,
    ConversationRead,
    ConversationStart,
    MessageCreate,
    MessageListResponse,
    MessageRead,
    ValidationErrorResponse,
)
from app.routers.utils.dependencies import get_conversation_service
from app.services.conversation_service import ConversationService

router = APIRouter(
    prefix="/conversations",
    tags=["conversations"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=ConversationListResponse)
def list_conversations(
    svc: ConversationService = Depends(get_conversation_service),
) -> ConversationListResponse:
    """List all conversations."""
    return ConversationListResponse(data=svc.list_conversations())


@router.get("/{conversation_id}", response_model=ConversationRead)
def get_conversation(
    conversation_id: str,
    svc: ConversationService = Depends(get_conversation_service),
) -> ConversationRead:
    """Get a conversation by ID."""
    return svc.get_conversation(conversation_id)


@router.post(
    "",
    response_model=ConversationRead,
    status_code=201,
    responses={400: {"model": ValidationErrorResponse}},
)
def start_conversation(
    data: ConversationStart,
    svc: ConversationService = Depends(get_conversation_service),
) -> ConversationRead:
    """Start a new conversation for a customer on a channel."""
    return svc.start_conversation(data)


@router.get("/{conversation_id}/messages", response_model=MessageListResponse)
def list_messages(
    conversation_id: str,
    svc: ConversationService = Depends(get_conversation_service),
) -> MessageListResponse:
    """List messages of a conversation, oldest first."""
    return MessageListResponse(data=svc.list_messages(conversation_id))


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageRead,
    status_code=201,
    responses={400: {"model": ValidationErrorResponse}},
)
def add_message(
    conversation_id: str,
    data: MessageCreate,
    svc: ConversationService = Depends(get_conversation_service),
) -> MessageRead:
    """Append a message to a conversation."""
    return svc.add_message(conversation_id, data)
