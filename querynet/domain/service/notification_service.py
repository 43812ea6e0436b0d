"""Notification domain service.

Notifications are a best-effort side effect: ``notify`` never raises, so a
failed notification can't fail the request that triggered it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from querynet.domain.error import NotFoundError
from querynet.domain.model import Notification
from querynet.domain.model.notification import NotificationPayload
from querynet.domain.repository import NotificationRepository
from querynet.domain.value import NotificationId, NotificationType, UserId

from .base import Service

notification_failures = logfire.metric_counter(
    "notification_failures",
    unit="1",
    description="Notifications that could not be stored",
)


@dataclass
class NotificationPage:
    """One page of a recipient's notifications."""

    notifications: list[Notification]
    total: int
    unread_count: int


class NotificationService(Service):
    """Domain service for notification operations."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
        """
        self.notification_repository = notification_repository

    async def notify(
        self,
        recipient_id: UserId,
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[NotificationPayload] = None,
        created_by: Optional[UserId] = None,
    ) -> Optional[Notification]:
        """Create a notification for one recipient.

        Failures are logged and added to the ``notification_failures``
        metric, never raised.

        Args:
            recipient_id: User who receives the notification
            type: Notification type
            title: Short title
            message: Notification text
            data: Typed payload matching ``type``
            created_by: User whose action triggered the notification

        Returns:
            The stored notification, or None if it could not be created
        """
        with logfire.span(
            "notification_service.notify",
            recipient_id=str(recipient_id),
            type=type.value,
        ):
            try:
                notification = Notification(
                    id=NotificationId(uuid4()),
                    recipient_id=recipient_id,
                    type=type,
                    title=title[:200],
                    message=message[:500],
                    data=data,
                    created_by=created_by,
                    created_at=datetime.now(),
                )
                saved = await self.notification_repository.save(notification)
            except Exception as e:
                notification_failures.add(1)
                logfire.error(
                    "Notification delivery failed",
                    recipient_id=str(recipient_id),
                    type=type.value,
                    error=str(e),
                )
                return None

            logfire.info(
                "Notification created",
                notification_id=str(saved.id),
                recipient_id=str(recipient_id),
                type=type.value,
            )
            return saved

    async def list_for_recipient(
        self,
        recipient_id: UserId,
        page: int = 1,
        limit: int = 20,
        is_read: Optional[bool] = None,
    ) -> NotificationPage:
        """List a recipient's notifications, newest first.

        Args:
            recipient_id: Owner of the notifications
            page: 1-based page number
            limit: Page size
            is_read: Optional read-state filter

        Returns:
            The page with the filtered total and the overall unread count
        """
        with logfire.span(
            "notification_service.list_for_recipient",
            recipient_id=str(recipient_id),
            page=page,
        ):
            offset = (page - 1) * limit
            notifications = await self.notification_repository.find_by_recipient(
                recipient_id, is_read=is_read, limit=limit, offset=offset
            )
            total = await self.notification_repository.count_by_recipient(
                recipient_id, is_read=is_read
            )
            unread = await self.notification_repository.count_by_recipient(
                recipient_id, is_read=False
            )
            return NotificationPage(
                notifications=notifications, total=total, unread_count=unread
            )

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Notification:
        """Mark one notification read.

        Raises:
            NotFoundError: If the recipient has no such notification
        """
        return await self._set_read_state(notification_id, recipient_id, True)

    async def mark_unread(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Notification:
        """Mark one notification unread (clears read_at).

        Raises:
            NotFoundError: If the recipient has no such notification
        """
        return await self._set_read_state(notification_id, recipient_id, False)

    async def _set_read_state(
        self, notification_id: NotificationId, recipient_id: UserId, is_read: bool
    ) -> Notification:
        with logfire.span(
            "notification_service.set_read_state",
            notification_id=str(notification_id),
            is_read=is_read,
        ):
            updated = await self.notification_repository.set_read_state(
                notification_id, recipient_id, is_read, datetime.now()
            )
            if not updated:
                logfire.warn(
                    "Notification not found for recipient",
                    notification_id=str(notification_id),
                    recipient_id=str(recipient_id),
                )
                raise NotFoundError("Notification", str(notification_id))
            return updated

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a recipient as read.

        Returns:
            Number of notifications changed
        """
        with logfire.span(
            "notification_service.mark_all_read", recipient_id=str(recipient_id)
        ):
            changed = await self.notification_repository.mark_all_read(
                recipient_id, datetime.now()
            )
            logfire.info(
                "Notifications marked read",
                recipient_id=str(recipient_id),
                changed=changed,
            )
            return changed

    async def delete(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> None:
        """Delete a notification owned by the recipient.

        Raises:
            NotFoundError: If the recipient has no such notification
        """
        with logfire.span(
            "notification_service.delete", notification_id=str(notification_id)
        ):
            deleted = await self.notification_repository.delete_for_recipient(
                notification_id, recipient_id
            )
            if not deleted:
                raise NotFoundError("Notification", str(notification_id))
            logfire.info("Notification deleted", notification_id=str(notification_id))
