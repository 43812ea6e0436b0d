"""Get community stats use case."""

from querynet.application.usecase.base import ResponseModel
from querynet.domain.service import StatsService


class StatsResponse(ResponseModel):
    total_questions: int
    total_users: int
    questions_today: int
    answered_percentage: int


class GetStatsUseCase:
    """Landing-page counters."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self) -> StatsResponse:
        stats = await self.stats_service.get_stats()
        return StatsResponse(
            total_questions=stats.total_questions,
            total_users=stats.total_users,
            questions_today=stats.questions_today,
            answered_percentage=stats.answered_percentage,
        )
