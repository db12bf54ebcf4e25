"""Relational storage backend over the SQLAlchemy ORM models."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import NoReturn, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from app.exceptions import InternalError, NotFoundError
from app.models.conversation import Conversation
from app.models.message import Message
from app.schemas.conversation import ConversationRead, MessageRead
from app.storage.base import ConversationBackend

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _conversation_to_read(row: Conversation) -> ConversationRead:
    return ConversationRead(
        id=row.id,
        customer_id=row.customer_id,
        channel=row.channel,
        metadata=dict(row.extra or {}),
        created=_as_utc(row.created_at),
        updated=_as_utc(row.updated_at),
        status=row.status,
    )


def _message_to_read(row: Message) -> MessageRead:
    return MessageRead(
        id=row.id,
        conversation_id=row.conversation_id,
        body=row.body,
        participant_id=row.participant_id,
        participant_type=row.participant_type,
        metadata=dict(row.extra or {}),
        created=_as_utc(row.created_at),
        updated=_as_utc(row.updated_at),
    )


class SQLConversationBackend(ConversationBackend):
    """
    Each public method is one transaction on the given session. Writes commit
    on success and roll back on failure; database errors become InternalError.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db

    def list_conversations(self) -> list[ConversationRead]:
        try:
            rows = self.db.query(Conversation).order_by(Conversation.created_at).all()
        except SQLAlchemyError as e:
            self._fail("list conversations", e)
        return [_conversation_to_read(r) for r in rows]

    def get_conversation(self, conversation_id: str) -> Optional[ConversationRead]:
        try:
            row = self.db.get(Conversation, conversation_id)
        except SQLAlchemyError as e:
            self._fail("get conversation", e)
        return _conversation_to_read(row) if row is not None else None

    def create_conversation(self, conversation: ConversationRead) -> ConversationRead:
        row = Conversation(
            id=conversation.id,
            customer_id=conversation.customer_id,
            channel=conversation.channel.value,
            status=conversation.status.value,
            extra=dict(conversation.metadata),
            created_at=conversation.created,
            updated_at=conversation.updated,
        )
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._fail("create conversation", e)
        return _conversation_to_read(row)

    def create_message(self, message: MessageRead) -> MessageRead:
        row = Message(
            id=message.id,
            conversation_id=message.conversation_id,
            body=message.body,
            participant_id=message.participant_id,
            participant_type=message.participant_type,
            extra=dict(message.metadata),
            created_at=message.created,
            updated_at=message.updated,
        )
        try:
            # existence check and insert share one transaction
            parent = (
                self.db.query(Conversation.id)
                .filter(Conversation.id == message.conversation_id)
                .with_for_update()
                .first()
            )
            if parent is None:
                self.db.rollback()
                raise NotFoundError("conversation", message.conversation_id)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._fail("create message", e)
        return _message_to_read(row)

    def list_messages(self, conversation_id: str) -> list[MessageRead]:
        try:
            conversation = self.db.get(Conversation, conversation_id)
            # relationship is ordered by Message.created_at
            rows = list(conversation.messages) if conversation is not None else []
        except SQLAlchemyError as e:
            self._fail("list messages", e)
        return [_message_to_read(r) for r in rows]

    def _fail(self, action: str, error: SQLAlchemyError) -> NoReturn:
        self.db.rollback()
        logger.error("Storage failure during %s: %s", action, error)
        raise InternalError(f"Could not {action}") from error
