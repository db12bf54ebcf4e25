"""Storage backends for conversations and messages."""

from app.storage.base import ConversationBackend
from app.storage.memory import InMemoryConversationBackend
from app.storage.sql import SQLConversationBackend

__all__ = [
    "ConversationBackend",
    "InMemoryConversationBackend",
    "SQLConversationBackend",
]
