"""Read-state and delete use cases for notifications.

Every operation is scoped to the caller: a notification owned by someone
else behaves as if it did not exist.
"""

from uuid import UUID

from pydantic import BaseModel

from querynet.domain.service import NotificationService
from querynet.domain.value import NotificationId, UserId

from .list_notifications import NotificationView


class RecipientRequest(BaseModel):
    user_id: str  # From authenticated user


class NotificationRequest(RecipientRequest):
    notification_id: UUID


class MarkNotificationUseCase:
    """Marks one notification read or unread."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: NotificationRequest, is_read: bool = True
    ) -> NotificationView:
        """Set the read state.

        Raises:
            NotFoundError: If the caller has no such notification
        """
        notification_id = NotificationId(request.notification_id)
        recipient_id = UserId(UUID(request.user_id))
        if is_read:
            notification = await self.notification_service.mark_read(
                notification_id, recipient_id
            )
        else:
            notification = await self.notification_service.mark_unread(
                notification_id, recipient_id
            )
        return NotificationView.from_notification(notification)


class MarkAllReadUseCase:
    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: RecipientRequest) -> int:
        """Returns the number of notifications that changed."""
        return await self.notification_service.mark_all_read(
            UserId(UUID(request.user_id))
        )


class DeleteNotificationUseCase:
    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: NotificationRequest) -> str:
        await self.notification_service.delete(
            NotificationId(request.notification_id), UserId(UUID(request.user_id))
        )
        return "Notification deleted"
