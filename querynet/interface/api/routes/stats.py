"""Community statistics route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from querynet.application.usecase.stats import GetStatsUseCase
from querynet.interface.api.envelope import envelope

router = APIRouter(prefix="/stats", tags=["stats"], route_class=DishkaRoute)


@router.get("")
async def get_stats(get_stats_use_case: FromDishka[GetStatsUseCase]) -> dict:
    """Totals, questions asked today and the share of answered questions."""
    return envelope(await get_stats_use_case.execute())
