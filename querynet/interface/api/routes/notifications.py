"""Notification routes. All of them act on the caller's own inbox."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from querynet.application.usecase.notification import (
    DeleteNotificationUseCase,
    ListNotificationsRequest,
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkNotificationUseCase,
    NotificationRequest,
    RecipientRequest,
)
from querynet.interface.api.envelope import envelope
from querynet.interface.api.identity import CurrentCaller

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("")
async def list_notifications(
    caller: CurrentCaller,
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    page: int = 1,
    limit: Optional[int] = None,
    is_read: Optional[bool] = Query(default=None, alias="isRead"),
) -> dict:
    """Newest first. ``meta.unreadCount`` counts all unread notifications."""
    result = await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=caller.user_id, page=page, limit=limit, is_read=is_read
        )
    )
    return envelope(
        result.notifications,
        count=len(result.notifications),
        pagination=result.pagination,
        meta={"unreadCount": result.unread_count},
    )


@router.put("/mark-all-read")
async def mark_all_read(
    caller: CurrentCaller,
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
) -> dict:
    changed = await mark_all_read_use_case.execute(
        RecipientRequest(user_id=caller.user_id)
    )
    return envelope(
        "All notifications marked as read", meta={"updatedCount": changed}
    )


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: UUID,
    caller: CurrentCaller,
    mark_notification_use_case: FromDishka[MarkNotificationUseCase],
) -> dict:
    notification = await mark_notification_use_case.execute(
        NotificationRequest(notification_id=notification_id, user_id=caller.user_id),
        is_read=True,
    )
    return envelope(notification)


@router.put("/{notification_id}/unread")
async def mark_unread(
    notification_id: UUID,
    caller: CurrentCaller,
    mark_notification_use_case: FromDishka[MarkNotificationUseCase],
) -> dict:
    notification = await mark_notification_use_case.execute(
        NotificationRequest(notification_id=notification_id, user_id=caller.user_id),
        is_read=False,
    )
    return envelope(notification)


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: UUID,
    caller: CurrentCaller,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
) -> dict:
    message = await delete_notification_use_case.execute(
        NotificationRequest(notification_id=notification_id, user_id=caller.user_id)
    )
    return envelope(message)
