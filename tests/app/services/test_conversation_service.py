"""Tests for ConversationService, run against both storage backends."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from app.constants.conversations import Channel, ConversationStatus
from app.exceptions import InternalError, NotFoundError, ValidationError
from app.schemas.conversation import ConversationStart, MessageCreate
from app.services.conversation_service import ConversationService


def test_start_conversation_defaults(conversation_service):
    conv = conversation_service.start_conversation(
        ConversationStart(customer_id="cust-1", channel="web")
    )
    assert conv.id.startswith("conversation_")
    assert conv.customer_id == "cust-1"
    assert conv.channel == Channel.WEB
    assert conv.status == ConversationStatus.ACTIVE
    assert conv.metadata == {}
    assert conv.created == conv.updated
    assert conv.created.tzinfo is not None


def test_start_conversation_keeps_metadata(conversation_service):
    conv = conversation_service.start_conversation(
        ConversationStart(
            customer_id="cust-2", channel="email", metadata={"locale": "en"}
        )
    )
    assert conv.channel == Channel.EMAIL
    assert conv.metadata == {"locale": "en"}


def test_start_then_get_round_trips(conversation_service, setup_conversation):
    found = conversation_service.get_conversation(setup_conversation.id)
    assert found == setup_conversation


def test_identical_starts_get_distinct_ids(conversation_service):
    data = ConversationStart(customer_id="cust-1", channel="web")
    first = conversation_service.start_conversation(data)
    second = conversation_service.start_conversation(data)
    assert first.id != second.id
    assert len(conversation_service.list_conversations()) == 2


def test_list_contains_started_conversation(conversation_service):
    conv = conversation_service.start_conversation(
        ConversationStart(customer_id="cust-1", channel="web")
    )
    assert conversation_service.list_conversations() == [conv]


def test_invalid_start_creates_nothing(conversation_service, setup_conversation):
    with pytest.raises(ValidationError) as exc:
        conversation_service.start_conversation(
            ConversationStart(customer_id="bad id!", channel="web")
        )
    assert exc.value.fields == ["customer_id"]
    assert conversation_service.list_conversations() == [setup_conversation]


@pytest.mark.parametrize("channel", ["sms", None])
def test_start_rejects_channel(conversation_service, channel):
    with pytest.raises(ValidationError) as exc:
        conversation_service.start_conversation(
            ConversationStart(customer_id="cust-1", channel=channel)
        )
    assert exc.value.fields == ["channel"]
    assert conversation_service.list_conversations() == []


def test_start_rejects_oversized_metadata(conversation_service):
    metadata = {str(i): "v" for i in range(21)}
    with pytest.raises(ValidationError):
        conversation_service.start_conversation(
            ConversationStart(customer_id="cust-1", channel="web", metadata=metadata)
        )


def test_get_unknown_conversation(conversation_service):
    with pytest.raises(NotFoundError) as exc:
        conversation_service.get_conversation("conversation_doesnotexist")
    assert exc.value.resource == "conversation"
    assert exc.value.resource_id == "conversation_doesnotexist"


def test_get_with_foreign_prefix_is_not_found(conversation_service, setup_message):
    with pytest.raises(NotFoundError):
        conversation_service.get_conversation(setup_message.id)


def test_add_message(conversation_service):
    conv = conversation_service.start_conversation(
        ConversationStart(customer_id="cust-1", channel="web")
    )
    msg = conversation_service.add_message(
        conv.id,
        MessageCreate(body="hi", participant_id="cust-1", participant_type="customer"),
    )
    assert msg.id.startswith("message_")
    assert msg.conversation_id == conv.id
    assert msg.body == "hi"
    assert msg.participant_id == "cust-1"
    assert msg.participant_type == "customer"
    assert msg.metadata == {}
    assert msg.created == msg.updated


def test_add_message_to_unknown_conversation(conversation_service, setup_conversation):
    with pytest.raises(NotFoundError):
        conversation_service.add_message(
            "conversation_missing", MessageCreate(body="hi")
        )
    assert conversation_service.list_messages(setup_conversation.id) == []


def test_add_message_rejects_oversized_metadata(
    conversation_service, setup_conversation
):
    metadata = {str(i): "v" for i in range(21)}
    with pytest.raises(ValidationError) as exc:
        conversation_service.add_message(
            setup_conversation.id, MessageCreate(body="hi", metadata=metadata)
        )
    assert exc.value.fields == ["metadata"]
    assert conversation_service.list_messages(setup_conversation.id) == []


def test_not_found_wins_over_validation(conversation_service):
    metadata = {str(i): "v" for i in range(21)}
    with pytest.raises(NotFoundError):
        conversation_service.add_message(
            "conversation_missing", MessageCreate(metadata=metadata)
        )


def test_list_messages_oldest_first(backend, setup_conversation):
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks = iter(start + timedelta(seconds=i) for i in range(10))
    svc = ConversationService(backend, clock=lambda: next(ticks))
    for body in ("one", "two", "three"):
        svc.add_message(setup_conversation.id, MessageCreate(body=body))
    bodies = [m.body for m in svc.list_messages(setup_conversation.id)]
    assert bodies == ["one", "two", "three"]


def test_list_messages_unknown_conversation(conversation_service):
    with pytest.raises(NotFoundError):
        conversation_service.list_messages("conversation_missing")


def test_id_generation_failure_is_internal_error(conversation_service):
    with patch("app.core.ids.uuid.uuid4", side_effect=OSError("no entropy")):
        with pytest.raises(InternalError):
            conversation_service.start_conversation(
                ConversationStart(customer_id="cust-1", channel="web")
            )
    assert conversation_service.list_conversations() == []


def test_long_free_text_fields_are_stored(conversation_service):
    """Unbounded fields round-trip unchanged on every backend."""
    customer_id = "a" * 300
    conv = conversation_service.start_conversation(
        ConversationStart(customer_id=customer_id, channel="web")
    )
    msg = conversation_service.add_message(
        conv.id,
        MessageCreate(
            body="b" * 5000,
            participant_id="p" * 300,
            participant_type="t" * 100,
        ),
    )
    assert conversation_service.get_conversation(conv.id).customer_id == customer_id
    [stored] = conversation_service.list_messages(conv.id)
    assert stored == msg
    assert len(stored.participant_id) == 300
    assert len(stored.participant_type) == 100
