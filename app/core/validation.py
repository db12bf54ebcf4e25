"""Request validation for starting conversations and appending messages."""

from __future__ import annotations

from typing import Mapping, Optional

from app.constants.conversations import (
    CUSTOMER_ID_PATTERN,
    METADATA_MAX_ENTRIES,
    Channel,
)
from app.exceptions import FieldError, ValidationError


def _metadata_errors(metadata: Optional[Mapping[str, str]]) -> list[FieldError]:
    if metadata is None:
        return []
    if len(metadata) > METADATA_MAX_ENTRIES:
        return [
            FieldError(
                "metadata",
                f"must have at most {METADATA_MAX_ENTRIES} entries, got {len(metadata)}",
            )
        ]
    return []


def validate_start_params(
    customer_id: Optional[str],
    channel: Optional[str],
    metadata: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Check the fields of a start-conversation request.
    Raises ValidationError listing every failing field; returns None when valid.
    """
    errors: list[FieldError] = []

    if not customer_id:
        errors.append(FieldError("customer_id", "is required"))
    elif CUSTOMER_ID_PATTERN.fullmatch(customer_id) is None:
        errors.append(
            FieldError(
                "customer_id",
                "may only contain letters, digits and the characters - _ + =",
            )
        )

    allowed = [c.value for c in Channel]
    if not channel:
        errors.append(FieldError("channel", "is required"))
    elif channel not in allowed:
        errors.append(FieldError("channel", f"must be one of: {', '.join(allowed)}"))

    errors.extend(_metadata_errors(metadata))
    if errors:
        raise ValidationError(errors)


def validate_add_message_params(
    body: Optional[str],
    participant_id: Optional[str],
    participant_type: Optional[str],
    metadata: Optional[Mapping[str, str]] = None,
) -> None:
    """Check the fields of an add-message request. Only metadata size is enforced."""
    errors = _metadata_errors(metadata)
    if errors:
        raise ValidationError(errors)
