"""Repository interfaces for QueryNet domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from querynet.domain.repository.answer import AnswerRepository
from querynet.domain.repository.notification import NotificationRepository
from querynet.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from querynet.domain.repository.user import UserRepository
from querynet.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "QuestionRepository",
    "QuestionFilter",
    "QuestionSortOrder",
    "AnswerRepository",
    "VoteRepository",
    "NotificationRepository",
]
