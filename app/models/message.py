"""Message model: one row per message appended to a conversation."""

from __future__ import annotations

from sqlalchemy import JSON, Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class Message(Base, TimestampMixin):
    """One row per message, attributed to a participant."""

    __tablename__ = "messages"

    __table_args__ = (
        Index("ix_messages_conversation_id_created_at", "conversation_id", "created_at"),
    )

    id = Column(String(64), primary_key=True)
    conversation_id = Column(
        String(64),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    body = Column(Text, nullable=False, default="")
    participant_id = Column(Text, nullable=False, default="")
    participant_type = Column(Text, nullable=False, default="")
    extra = Column(
        "metadata", JSON, nullable=False, default=dict
    )  # DB column "metadata"; avoid shadowing Base.metadata

    conversation = relationship("Conversation", back_populates="messages")
