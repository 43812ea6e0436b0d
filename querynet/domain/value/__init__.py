"""Domain value objects for QueryNet."""

from querynet.domain.value.identifiers import (
    AnswerId,
    NotificationId,
    QuestionId,
    UserId,
    VoteId,
)
from querynet.domain.value.types import (
    Email,
    NotificationType,
    QuestionStatus,
    TagName,
    Theme,
    Username,
    UserRole,
    UserStat,
    VotableType,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "VoteId",
    "NotificationId",
    # Types
    "Email",
    "NotificationType",
    "QuestionStatus",
    "TagName",
    "Theme",
    "Username",
    "UserRole",
    "UserStat",
    "VotableType",
    "VoteDirection",
]
