"""Messaging domain service: conversations, messages and automated replies."""

import logging
import random
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from admindash.domain.entities import (
    ContactStatus,
    Conversation,
    Message,
    MessagePlatform,
    MessageSender,
)
from admindash.domain.errors import NotFoundError, ValidationError, conversation_not_found
from admindash.settings import ServiceTimings
from admindash.utils.ids import next_sequential_id, timestamp_id
from admindash.utils.timestamps import utc_now

if TYPE_CHECKING:
    from admindash.scheduler import Scheduler
    from admindash.storage.entity_store import EntityStore

logger = logging.getLogger(__name__)

NEW_CONTACT_PHONE = "+1-202-555-0199"


def conversation_task_tag(conversation_id: int) -> tuple[str, int]:
    """Scheduler tag for automated replies pending on a conversation."""
    return ("conversation", conversation_id)


def automated_reply_text(platform: MessagePlatform) -> str:
    return f"Thanks for your message! This is an automated reply from {MessagePlatform(platform).value}."


class MessagingService:
    """Service for chatting with administrators.

    Every message sent by the current user is answered once by the contact
    after a short random delay; typing status is shown in between.
    """

    def __init__(
        self,
        store: "EntityStore",
        scheduler: "Scheduler",
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
        timings: Optional[ServiceTimings] = None,
    ):
        """Initialize messaging service.

        Args:
            store: Entity store
            scheduler: Scheduler used for automated replies
            clock: Source of the current time
            rng: Random generator for ids and reply delays
            timings: Reply delay bounds
        """
        self.store = store
        self.scheduler = scheduler
        self.clock = clock
        self.rng = rng or random.Random()
        self.timings = timings or ServiceTimings()

    def list_conversations(self) -> list[Conversation]:
        return list(self.store.conversations)

    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        for conversation in self.store.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def require_conversation(self, conversation_id: int) -> Conversation:
        conversation = self.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError(conversation_not_found(conversation_id))
        return conversation

    def messages_for(self, conversation_id: int) -> list[Message]:
        """Messages of one conversation in the order they were sent."""
        return [m for m in self.store.messages if m.conversation_id == conversation_id]

    def is_typing(self, conversation_id: int) -> bool:
        return self.store.typing_status.get(conversation_id, False)

    def change_platform(self, platform: MessagePlatform) -> MessagePlatform:
        self.store.active_platform = MessagePlatform(platform)
        return self.store.active_platform

    def _append_message(
        self, conversation_id: int, text: str, sender: MessageSender, platform: MessagePlatform
    ) -> Message:
        now = self.clock()
        message = Message(
            id=timestamp_id(now, self.rng),
            conversation_id=conversation_id,
            text=text,
            timestamp=now,
            sender=sender,
            platform=platform,
        )
        self.store.messages = self.store.messages + (message,)
        self.store.conversations = tuple(
            replace(c, last_message=text, timestamp=now) if c.id == conversation_id else c
            for c in self.store.conversations
        )
        return message

    def send_message(
        self, text: str, conversation_id: int, platform: Optional[MessagePlatform] = None
    ) -> Message:
        """Send a message from the current user and schedule the contact's reply.

        Args:
            text: Message text
            conversation_id: Target conversation
            platform: Platform to send on (defaults to the active platform)

        Returns:
            The sent message

        Raises:
            ValidationError: If text is blank
            NotFoundError: If the conversation does not exist
        """
        if not text.strip():
            raise ValidationError("Message text is required")
        self.require_conversation(conversation_id)
        platform = MessagePlatform(platform or self.store.active_platform)

        message = self._append_message(conversation_id, text, MessageSender.ME, platform)
        self.store.typing_status = {**self.store.typing_status, conversation_id: True}

        delay = self.rng.uniform(self.timings.chat_reply_min_delay, self.timings.chat_reply_max_delay)
        self.scheduler.call_later(
            delay,
            self._deliver_reply,
            conversation_id,
            platform,
            tag=conversation_task_tag(conversation_id),
        )
        return message

    def _deliver_reply(self, conversation_id: int, platform: MessagePlatform) -> None:
        self.store.typing_status = {**self.store.typing_status, conversation_id: False}
        if self.get_conversation(conversation_id) is None:
            logger.debug("Dropping reply for vanished conversation %s", conversation_id)
            return
        self._append_message(
            conversation_id, automated_reply_text(platform), MessageSender.CONTACT, platform
        )

    def start_conversation(self, contact_id: int, message: str) -> Optional[int]:
        """Message an administrator, opening a conversation if needed.

        An existing conversation with the same contact on the active
        platform is reused.

        Args:
            contact_id: Administrator to message
            message: First message text

        Returns:
            ID of the conversation used, or None if the contact does not exist
        """
        contact = next((a for a in self.store.administrators if a.id == contact_id), None)
        if contact is None:
            return None

        platform = self.store.active_platform
        for conversation in self.store.conversations:
            if conversation.contact_id == contact_id and conversation.platform == platform:
                self.send_message(message, conversation.id, platform)
                return conversation.id

        conversation = Conversation(
            id=next_sequential_id(c.id for c in self.store.conversations),
            contact_id=contact.id,
            contact_name=contact.name,
            avatar_url=contact.avatar_url,
            last_message="",
            timestamp=self.clock(),
            unread_count=0,
            platform=platform,
            status=ContactStatus.ONLINE,
            email=contact.email,
            phone=NEW_CONTACT_PHONE,
        )
        self.store.conversations = (conversation,) + self.store.conversations
        self.send_message(message, conversation.id, platform)
        return conversation.id

    def update_conversation_contact(self, updated: Conversation) -> Conversation:
        """Replace a conversation's contact details.

        Raises:
            NotFoundError: If the conversation does not exist
        """
        self.require_conversation(updated.id)
        self.store.conversations = tuple(
            updated if c.id == updated.id else c for c in self.store.conversations
        )
        return updated
