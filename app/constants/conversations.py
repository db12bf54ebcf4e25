"""Enumerations and limits for conversations and messages."""

import re
from enum import StrEnum


class Channel(StrEnum):
    """Medium through which a conversation takes place."""

    WEB = "web"
    EMAIL = "email"


class ConversationStatus(StrEnum):
    """Lifecycle marker. New conversations start ACTIVE; no transitions are defined."""

    OBSERVING = "observing"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    FINISHED = "finished"
    FAILED = "failed"


CONVERSATION_ID_PREFIX = "conversation"
MESSAGE_ID_PREFIX = "message"

METADATA_MAX_ENTRIES = 20
CUSTOMER_ID_PATTERN = re.compile(r"[A-Za-z0-9\-_+=]+")
