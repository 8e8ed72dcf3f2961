"""Notification domain service."""

import random
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from admindash.domain.entities import Notification
from admindash.utils.ids import timestamp_id
from admindash.utils.timestamps import utc_now

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore


class NotificationService:
    """Service for emitting and reading notifications."""

    def __init__(
        self,
        store: "EntityStore",
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ):
        """Initialize notification service.

        Args:
            store: Entity store
            clock: Source of the current time
            rng: Random generator used for id tiebreaks
        """
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()

    def add_notification(
        self,
        title: str,
        description: str,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> Notification:
        """Create an unread notification and put it at the top of the list."""
        now = self.clock()
        notification = Notification(
            id=timestamp_id(now, self.rng),
            title=title,
            description=description,
            timestamp=now,
            read=False,
            icon=icon,
            icon_color=icon_color,
        )
        self.store.notifications = (notification,) + self.store.notifications
        return notification

    def mark_all_read(self) -> None:
        """Mark every notification as read."""
        self.store.notifications = tuple(
            n if n.read else replace(n, read=True) for n in self.store.notifications
        )

    def list_notifications(self, unread_only: bool = False) -> list[Notification]:
        return [n for n in self.store.notifications if not (unread_only and n.read)]

    def unread_count(self) -> int:
        return sum(1 for n in self.store.notifications if not n.read)
