"""Community statistics use case."""

from .get_stats import GetStatsUseCase, StatsResponse

__all__ = ["GetStatsUseCase", "StatsResponse"]
