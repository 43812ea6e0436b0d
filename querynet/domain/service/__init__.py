"""Domain services."""

from .answer_service import AcceptResult, AnswerService
from .base import Service
from .jwt_service import JWTService
from .notification_service import NotificationPage, NotificationService
from .question_service import QuestionPage, QuestionService
from .stats_service import CommunityStats, StatsService
from .user_service import UserService
from .vote_service import VoteResult, VoteService

__all__ = [
    "AcceptResult",
    "AnswerService",
    "CommunityStats",
    "JWTService",
    "NotificationPage",
    "NotificationService",
    "QuestionPage",
    "QuestionService",
    "Service",
    "StatsService",
    "UserService",
    "VoteResult",
    "VoteService",
]
