"""In-process storage backend guarded by a lock."""

from __future__ import annotations

import threading
from typing import Optional

from app.exceptions import InternalError, NotFoundError
from app.schemas.conversation import ConversationRead, MessageRead
from app.storage.base import ConversationBackend


class InMemoryConversationBackend(ConversationBackend):
    """
    Keeps records in dicts keyed by id. One instance is shared by all requests
    of an application, so every read and write takes the lock.
    Records are copied on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._conversations: dict[str, ConversationRead] = {}
        self._messages: dict[str, MessageRead] = {}

    def list_conversations(self) -> list[ConversationRead]:
        with self._lock:
            return [c.model_copy(deep=True) for c in self._conversations.values()]

    def get_conversation(self, conversation_id: str) -> Optional[ConversationRead]:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            return conversation.model_copy(deep=True) if conversation else None

    def create_conversation(self, conversation: ConversationRead) -> ConversationRead:
        with self._lock:
            if conversation.id in self._conversations:
                raise InternalError(f"Conversation {conversation.id} already exists")
            self._conversations[conversation.id] = conversation.model_copy(deep=True)
        return conversation

    def create_message(self, message: MessageRead) -> MessageRead:
        with self._lock:
            if message.conversation_id not in self._conversations:
                raise NotFoundError("conversation", message.conversation_id)
            if message.id in self._messages:
                raise InternalError(f"Message {message.id} already exists")
            self._messages[message.id] = message.model_copy(deep=True)
        return message

    def list_messages(self, conversation_id: str) -> list[MessageRead]:
        with self._lock:
            messages = [
                m.model_copy(deep=True)
                for m in self._messages.values()
                if m.conversation_id == conversation_id
            ]
        return sorted(messages, key=lambda m: m.created)
