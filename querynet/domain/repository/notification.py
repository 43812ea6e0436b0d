"""Notification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from querynet.domain.model.notification import Notification
from querynet.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity.

    Every read or write other than ``save`` is scoped to a recipient, so one
    user can never see or modify another user's notifications.
    """

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Persist a new notification.

        Implementations must isolate this write (e.g. with a savepoint) so
        that a failure does not abort the caller's transaction.
        """
        pass

    @abstractmethod
    async def find_for_recipient(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
    ) -> Optional[Notification]:
        """Find one notification owned by ``recipient_id``."""
        pass

    @abstractmethod
    async def find_by_recipient(
        self,
        recipient_id: UserId,
        is_read: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        """List a recipient's notifications, newest first.

        Args:
            recipient_id: Owner of the notifications
            is_read: Filter by read state (None for all)
            limit: Maximum number to return
            offset: Number to skip
        """
        pass

    @abstractmethod
    async def count_by_recipient(
        self, recipient_id: UserId, is_read: Optional[bool] = None
    ) -> int:
        """Count a recipient's notifications, optionally by read state."""
        pass

    @abstractmethod
    async def set_read_state(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        is_read: bool,
        at: datetime,
    ) -> Optional[Notification]:
        """Set the read flag (read_at is set to ``at`` or cleared).

        Returns:
            The updated notification, or None if the recipient has no such notification
        """
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId, at: datetime) -> int:
        """Bulk conditional update: every unread notification becomes read.

        Returns:
            Number of notifications changed
        """
        pass

    @abstractmethod
    async def delete_for_recipient(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        """Delete a notification owned by ``recipient_id``.

        Returns:
            True if it existed and was removed
        """
        pass
