"""Domain model entities for QueryNet."""

from querynet.domain.model.answer import Answer
from querynet.domain.model.notification import Notification, NotificationPayload
from querynet.domain.model.question import Question
from querynet.domain.model.user import User, UserPreferences, UserStats
from querynet.domain.model.vote import Vote, VoteChange, VoteLedger

__all__ = [
    "User",
    "UserPreferences",
    "UserStats",
    "Question",
    "Answer",
    "Vote",
    "VoteChange",
    "VoteLedger",
    "Notification",
    "NotificationPayload",
]
