"""Pydantic schemas for conversations and their messages."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.constants.conversations import Channel, ConversationStatus

# -----------------------------------------------------------------------------
# Conversation schemas
# -----------------------------------------------------------------------------


class ConversationStart(BaseModel):
    """
    Request to start a conversation.

    Fields are loosely typed so presence, charset and enum problems are
    reported by app.core.validation rather than as parse errors.
    """

    customer_id: Optional[str] = None
    channel: Optional[str] = None
    metadata: Optional[dict[str, str]] = None


class ConversationRead(BaseModel):
    """A stored conversation."""

    id: str
    customer_id: str
    channel: Channel
    metadata: dict[str, str] = Field(default_factory=dict)
    created: datetime
    updated: datetime
    status: ConversationStatus


class ConversationListResponse(BaseModel):
    data: list[ConversationRead]


# -----------------------------------------------------------------------------
# Message schemas
# -----------------------------------------------------------------------------


class MessageCreate(BaseModel):
    """Request to append a message to a conversation."""

    body: str = ""
    participant_id: str = ""
    participant_type: str = ""
    metadata: Optional[dict[str, str]] = None


class MessageRead(BaseModel):
    """A stored message."""

    id: str
    conversation_id: str
    body: str
    participant_id: str
    participant_type: str
    metadata: dict[str, str] = Field(default_factory=dict)
    created: datetime
    updated: datetime


class MessageListResponse(BaseModel):
    data: list[MessageRead]


# -----------------------------------------------------------------------------
# Error payloads
# -----------------------------------------------------------------------------


class FieldErrorRead(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    detail: str
    errors: list[FieldErrorRead]
