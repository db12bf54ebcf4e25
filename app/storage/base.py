"""
Storage backend interface.

Backends persist conversation and message records for ConversationService.
The service owns validation and identifier generation; backends only store
and retrieve fully built records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.schemas.conversation import ConversationRead, MessageRead


class ConversationBackend(ABC):
    """Contract for conversation storage. New stores implement this interface."""

    @abstractmethod
    def list_conversations(self) -> list[ConversationRead]:
        """Return every stored conversation. Order is backend specific."""
        ...

    @abstractmethod
    def get_conversation(self, conversation_id: str) -> Optional[ConversationRead]:
        """Return the conversation or None if it does not exist."""
        ...

    @abstractmethod
    def create_conversation(self, conversation: ConversationRead) -> ConversationRead:
        """Persist a new conversation and return the stored record."""
        ...

    @abstractmethod
    def create_message(self, message: MessageRead) -> MessageRead:
        """
        Persist a new message and return the stored record.
        Raise NotFoundError if message.conversation_id does not exist at insert time.
        """
        ...

    @abstractmethod
    def list_messages(self, conversation_id: str) -> list[MessageRead]:
        """Return the messages of a conversation ordered by creation time."""
        ...
