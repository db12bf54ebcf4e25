"""Start, fetch and list conversations; append and list their messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List

from app.constants.conversations import (
    CONVERSATION_ID_PREFIX,
    MESSAGE_ID_PREFIX,
    Channel,
    ConversationStatus,
)
from app.core.ids import generate_id, has_prefix
from app.core.validation import validate_add_message_params, validate_start_params
from app.exceptions import NotFoundError
from app.infra.logging_config import get_logger
from app.schemas.conversation import (
    ConversationRead,
    ConversationStart,
    MessageCreate,
    MessageRead,
)
from app.storage.base import ConversationBackend

logger = get_logger("conversations")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationService:
    """Validates requests, assigns ids and timestamps, and delegates storage to a backend."""

    def __init__(
        self,
        backend: ConversationBackend,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.backend = backend
        self._clock = clock

    def list_conversations(self) -> List[ConversationRead]:
        """All conversations. Order is not guaranteed; sort by created if needed."""
        return self.backend.list_conversations()

    def get_conversation(self, conversation_id: str) -> ConversationRead:
        """Fetch a conversation by id. Raises NotFoundError if absent."""
        conversation = None
        if has_prefix(conversation_id, CONVERSATION_ID_PREFIX):
            conversation = self.backend.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError("conversation", conversation_id)
        return conversation

    def start_conversation(self, data: ConversationStart) -> ConversationRead:
        """
        Create a new active conversation.
        Raises ValidationError for malformed fields, InternalError if id
        generation or storage fails.
        """
        validate_start_params(data.customer_id, data.channel, data.metadata)
        now = self._clock()
        conversation = ConversationRead(
            id=generate_id(CONVERSATION_ID_PREFIX),
            customer_id=data.customer_id,
            channel=Channel(data.channel),
            metadata=dict(data.metadata or {}),
            created=now,
            updated=now,
            status=ConversationStatus.ACTIVE,
        )
        stored = self.backend.create_conversation(conversation)
        logger.info(
            "Started conversation %s for customer %s on %s",
            stored.id,
            stored.customer_id,
            stored.channel.value,
        )
        return stored

    def add_message(self, conversation_id: str, data: MessageCreate) -> MessageRead:
        """
        Append a message to an existing conversation.
        Raises NotFoundError, ValidationError or InternalError.
        """
        self.get_conversation(conversation_id)
        validate_add_message_params(
            data.body, data.participant_id, data.participant_type, data.metadata
        )
        now = self._clock()
        message = MessageRead(
            id=generate_id(MESSAGE_ID_PREFIX),
            conversation_id=conversation_id,
            body=data.body,
            participant_id=data.participant_id,
            participant_type=data.participant_type,
            metadata=dict(data.metadata or {}),
            created=now,
            updated=now,
        )
        stored = self.backend.create_message(message)
        logger.info("Added message %s to conversation %s", stored.id, conversation_id)
        return stored

    def list_messages(self, conversation_id: str) -> List[MessageRead]:
        """Messages of a conversation, oldest first. Raises NotFoundError if absent."""
        self.get_conversation(conversation_id)
        return self.backend.list_messages(conversation_id)
