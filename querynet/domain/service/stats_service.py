"""Community statistics service."""

from dataclasses import dataclass
from datetime import datetime

import logfire

from querynet.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
    UserRepository,
)

from .base import Service


@dataclass
class CommunityStats:
    total_questions: int
    total_users: int
    questions_today: int
    answered_percentage: int


class StatsService(Service):
    """Aggregates site-wide counts for the landing page."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
    ) -> None:
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_repository = user_repository

    async def get_stats(self) -> CommunityStats:
        """Compute totals, today's questions and the share of answered questions.

        "Today" starts at local midnight. The answered percentage is rounded
        to the nearest integer and is 0 when there are no questions.
        """
        with logfire.span("stats_service.get_stats"):
            total_questions = await self.question_repository.count(
                QuestionFilter(status=None)
            )
            total_users = await self.user_repository.count()

            midnight = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
            questions_today = await self.question_repository.count(
                QuestionFilter(status=None, created_since=midnight)
            )

            answered = await self.answer_repository.count_answered_questions()
            answered_percentage = (
                round(answered / total_questions * 100) if total_questions else 0
            )

            return CommunityStats(
                total_questions=total_questions,
                total_users=total_users,
                questions_today=questions_today,
                answered_percentage=answered_percentage,
            )
