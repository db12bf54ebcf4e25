from fastapi import Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.conversation_service import ConversationService
from app.storage.base import ConversationBackend
from app.storage.sql import SQLConversationBackend


def get_conversation_backend(db: Session = Depends(get_db)) -> ConversationBackend:
    """
    FastAPI dependency returning the SQL backend on the request's session.
    create_app overrides it when the app owns a single backend (e.g. in-memory),
    so no database session is opened in that case.
    """
    return SQLConversationBackend(db)


def get_conversation_service(
    backend: ConversationBackend = Depends(get_conversation_backend),
) -> ConversationService:
    """FastAPI dependency to get a ConversationService bound to the request's backend."""
    return ConversationService(backend)
