"""Conversation model: one row per customer interaction on a channel."""

from __future__ import annotations

from sqlalchemy import JSON, Column, String, Text
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin


class Conversation(Base, TimestampMixin):
    """One row per conversation. id is a prefixed string (conversation_...)."""

    __tablename__ = "conversations"

    id = Column(String(64), primary_key=True)
    customer_id = Column(Text, nullable=False, index=True)
    channel = Column(String(16), nullable=False)  # 'web' | 'email'
    status = Column(String(16), nullable=False)
    extra = Column(
        "metadata", JSON, nullable=False, default=dict
    )  # DB column "metadata"; avoid shadowing Base.metadata

    messages = relationship(
        "Message",
        back_populates="conversation",
        order_by="Message.created_at",
    )
