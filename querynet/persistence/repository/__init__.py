"""PostgreSQL repository implementations."""

from querynet.persistence.repository.answer import PostgresAnswerRepository
from querynet.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from querynet.persistence.repository.question import PostgresQuestionRepository
from querynet.persistence.repository.user import PostgresUserRepository
from querynet.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresVoteRepository",
    "PostgresNotificationRepository",
]
