"""Tests for conversations and automated replies."""

import pytest

from admindash.domain.entities import MessagePlatform, MessageSender
from admindash.domain.errors import NotFoundError, ValidationError
from admindash.domain.messaging import NEW_CONTACT_PHONE, MessagingService
from admindash.settings import ServiceTimings


@pytest.fixture
def messaging(store, scheduler, clock, rng):
    return MessagingService(store, scheduler, clock=clock, rng=rng)


def test_send_message_shows_typing_then_reply(messaging, scheduler):
    sent = messaging.send_message("Ping", 1)

    assert sent.sender == MessageSender.ME
    assert messaging.require_conversation(1).last_message == "Ping"
    assert messaging.is_typing(1)

    scheduler.advance(2.5)

    assert not messaging.is_typing(1)
    reply = messaging.messages_for(1)[-1]
    assert reply.sender == MessageSender.CONTACT
    assert reply.text == "Thanks for your message! This is an automated reply from default."
    assert messaging.require_conversation(1).last_message == reply.text


def test_reply_waits_for_minimum_delay(messaging, scheduler):
    messaging.send_message("Ping", 1)

    scheduler.advance(1.4)

    assert messaging.is_typing(1)
    assert messaging.messages_for(1)[-1].text == "Ping"


def test_each_message_gets_one_reply(store, scheduler, clock, rng):
    timings = ServiceTimings(chat_reply_min_delay=1.0, chat_reply_max_delay=1.0)
    messaging = MessagingService(store, scheduler, clock=clock, rng=rng, timings=timings)

    messaging.send_message("One", 2)
    messaging.send_message("Two", 2)
    scheduler.run_until_idle()

    senders = [m.sender for m in messaging.messages_for(2)[-4:]]
    assert senders == [MessageSender.ME, MessageSender.ME, MessageSender.CONTACT, MessageSender.CONTACT]


def test_reply_uses_platform_of_sent_message(messaging, scheduler):
    messaging.send_message("Hola", 1, platform=MessagePlatform.WHATSAPP)
    scheduler.run_until_idle()

    reply = messaging.messages_for(1)[-1]
    assert reply.platform == MessagePlatform.WHATSAPP
    assert reply.text.endswith("from whatsapp.")


def test_blank_message_rejected(messaging):
    with pytest.raises(ValidationError):
        messaging.send_message("   ", 1)


def test_unknown_conversation(messaging):
    with pytest.raises(NotFoundError):
        messaging.send_message("Hi", 99)


class TestStartConversation:
    """Tests for opening conversations with administrators."""

    def test_reuses_conversation_on_same_platform(self, messaging, store):
        before = len(store.conversations)

        conversation_id = messaging.start_conversation(2, "About tomorrow")

        assert conversation_id == 1
        conversation = messaging.get_conversation(conversation_id)
        assert conversation.last_message == "About tomorrow"
        assert len(store.conversations) == before

    def test_new_platform_opens_new_conversation(self, messaging, store):
        messaging.change_platform(MessagePlatform.MESSENGER)

        conversation_id = messaging.start_conversation(2, "Hi on messenger")

        assert conversation_id == 3
        conversation = messaging.get_conversation(conversation_id)
        assert conversation.platform == MessagePlatform.MESSENGER
        assert conversation.contact_name == "Jane Doe"
        assert conversation.phone == NEW_CONTACT_PHONE
        assert store.conversations[0].id == 3

    def test_new_contact(self, messaging, scheduler):
        conversation = messaging.get_conversation(messaging.start_conversation(1, "Hello boss"))

        assert conversation.contact_id == 1
        assert conversation.contact_name == "SAIFUL ALAM RAFI"
        scheduler.run_until_idle()
        assert [m.sender for m in messaging.messages_for(conversation.id)] == [
            MessageSender.ME,
            MessageSender.CONTACT,
        ]

    def test_unknown_contact_returns_none(self, messaging, store):
        before = store.conversations

        assert messaging.start_conversation(42, "Anyone?") is None
        assert store.conversations == before
