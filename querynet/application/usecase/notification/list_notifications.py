"""List notifications use case."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from querynet.application.usecase.base import Pagination, ResponseModel
from querynet.config import PaginationSettings
from querynet.domain.model import Notification
from querynet.domain.service import NotificationService
from querynet.domain.value import NotificationType, UserId


class NotificationView(ResponseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    read_at: Optional[datetime] = None
    data: Optional[dict[str, Any]] = None
    created_by: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationView":
        return cls(
            id=str(notification.id),
            type=notification.type,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            read_at=notification.read_at,
            data=_payload(notification),
            created_by=str(notification.created_by) if notification.created_by else None,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    user_id: str  # From authenticated user
    page: int = 1
    limit: Optional[int] = None
    is_read: Optional[bool] = None


class ListNotificationsResponse(ResponseModel):
    notifications: list[NotificationView]
    pagination: Pagination
    unread_count: int


class ListNotificationsUseCase:
    """Use case for the caller's notification inbox."""

    def __init__(
        self,
        notification_service: NotificationService,
        pagination: PaginationSettings,
    ) -> None:
        self.notification_service = notification_service
        self.pagination = pagination

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Newest first, with the overall unread count alongside the page."""
        page = max(1, request.page)
        limit = min(
            max(1, request.limit or self.pagination.default_limit),
            self.pagination.max_limit,
        )
        result = await self.notification_service.list_for_recipient(
            UserId(UUID(request.user_id)),
            page=page,
            limit=limit,
            is_read=request.is_read,
        )
        return ListNotificationsResponse(
            notifications=[
                NotificationView.from_notification(n) for n in result.notifications
            ],
            pagination=Pagination.of(page=page, limit=limit, total=result.total),
            unread_count=result.unread_count,
        )


def _payload(notification: Notification) -> Optional[dict[str, Any]]:
    """Typed payload as a camelCase dict (``questionId``, ``answerId``)."""
    if notification.data is None:
        return None
    dumped = notification.data.model_dump(mode="json", exclude_none=True)
    return {to_camel(key): value for key, value in dumped.items()}
