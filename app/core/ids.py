"""Type-prefixed unique identifiers for conversations and messages."""

from __future__ import annotations

import uuid

from app.exceptions import InternalError


def generate_id(prefix: str) -> str:
    """
    Return a new identifier of the form {prefix}_{32 hex chars}.

    The suffix is a random UUID, so identifiers are unique but not sortable.
    An unavailable entropy source is reported as InternalError.
    """
    if not prefix:
        raise ValueError("Identifier prefix must not be empty")
    try:
        suffix = uuid.uuid4().hex
    except (OSError, NotImplementedError) as e:
        raise InternalError(f"Could not generate {prefix} id") from e
    return f"{prefix}_{suffix}"


def has_prefix(identifier: str, prefix: str) -> bool:
    return identifier.startswith(f"{prefix}_") and len(identifier) > len(prefix) + 1
