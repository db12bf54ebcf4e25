"""
Error taxonomy for the conversation store.

Raised by validation, identifier generation and storage backends; translated
into HTTP responses by the handlers registered in app.main.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ConversationError(Exception):
    """Base class for all conversation store errors."""


class ValidationError(ConversationError):
    """One or more request fields are malformed."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid fields: " + ", ".join(e.field for e in self.errors)
        )

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


class NotFoundError(ConversationError):
    """The referenced record does not exist."""

    def __init__(self, resource: str, resource_id: str) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"No {resource} found with id: {resource_id}")


class InternalError(ConversationError):
    """Identifier generation or the storage backend failed."""
