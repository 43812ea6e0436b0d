"""Notification use cases."""

from .list_notifications import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationView,
)
from .manage_notifications import (
    DeleteNotificationUseCase,
    MarkAllReadUseCase,
    MarkNotificationUseCase,
    NotificationRequest,
    RecipientRequest,
)

__all__ = [
    "DeleteNotificationUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllReadUseCase",
    "MarkNotificationUseCase",
    "NotificationRequest",
    "NotificationView",
    "RecipientRequest",
]
