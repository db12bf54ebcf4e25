"""FastAPI application factory and error translation."""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.exceptions import InternalError, NotFoundError, ValidationError
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers.conversations_router import router as conversations_router
from app.routers.utils.dependencies import get_conversation_backend
from app.storage.base import ConversationBackend
from app.storage.memory import InMemoryConversationBackend

logger = get_logger("api")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content={
                "detail": str(exc),
                "errors": [{"field": e.field, "message": e.message} for e in exc.errors],
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("Not found on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.exception(
            "Internal error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    testing: bool = False,
    backend: Optional[ConversationBackend] = None,
) -> FastAPI:
    """
    Build the application. A backend passed in is used for every request;
    otherwise STORAGE_BACKEND=memory installs one in-memory store for the app
    and the default is the SQL backend on a per-request session.
    """
    settings = get_settings()
    if not testing:
        LoggingConfig(settings.log_level)

    app = FastAPI(title=settings.app_name)
    if backend is None and settings.uses_memory_storage:
        backend = InMemoryConversationBackend()
    app.state.conversation_backend = backend
    if backend is not None:
        app.dependency_overrides[get_conversation_backend] = lambda: backend

    register_exception_handlers(app)
    app.include_router(conversations_router)

    @app.get("/health", tags=["system"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "Application created (storage=%s, environment=%s)",
        type(backend).__name__ if backend is not None else "SQLConversationBackend",
        settings.environment,
    )
    return app


def run() -> None:
    """Serve the app with uvicorn; the app is built by the factory at startup."""
    settings = get_settings()
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=settings.port)
