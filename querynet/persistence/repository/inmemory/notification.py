"""In-memory notification repository for testing."""

from datetime import datetime
from typing import Optional

from querynet.domain.model.notification import Notification
from querynet.domain.repository.notification import NotificationRepository
from querynet.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    def _owned(self, recipient_id: UserId, is_read: Optional[bool]) -> list[Notification]:
        return [
            n
            for n in self._notifications.values()
            if n.recipient_id == recipient_id
            and (is_read is None or n.is_read == is_read)
        ]

    async def save(self, notification: Notification) -> Notification:
        self._notifications[notification.id] = notification
        return notification

    async def find_for_recipient(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Optional[Notification]:
        n = self._notifications.get(notification_id)
        return n if n and n.recipient_id == recipient_id else None

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        is_read: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        owned = sorted(
            self._owned(recipient_id, is_read),
            key=lambda n: n.created_at,
            reverse=True,
        )
        return owned[offset : offset + limit]

    async def count_by_recipient(
        self, recipient_id: UserId, is_read: Optional[bool] = None
    ) -> int:
        return len(self._owned(recipient_id, is_read))

    async def set_read_state(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        is_read: bool,
        at: datetime,
    ) -> Optional[Notification]:
        n = await self.find_for_recipient(notification_id, recipient_id)
        if n is None:
            return None
        updated = n.model_copy(
            update={"is_read": is_read, "read_at": at if is_read else None}
        )
        self._notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, recipient_id: UserId, at: datetime) -> int:
        unread = self._owned(recipient_id, is_read=False)
        for n in unread:
            self._notifications[n.id] = n.model_copy(
                update={"is_read": True, "read_at": at}
            )
        return len(unread)

    async def delete_for_recipient(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        if await self.find_for_recipient(notification_id, recipient_id) is None:
            return False
        del self._notifications[notification_id]
        return True
