"""User routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from querynet.application.usecase.user import (
    GetPreferencesRequest,
    GetPreferencesUseCase,
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UpdatePreferencesRequest,
    UpdatePreferencesUseCase,
)
from querynet.domain.value import Theme
from querynet.interface.api.envelope import envelope
from querynet.interface.api.identity import CurrentCaller

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdatePreferencesAPIRequest(BaseModel):
    """Preferences patch with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    theme: Optional[Theme] = None


@router.get("/me/preferences")
async def get_preferences(
    caller: CurrentCaller,
    get_preferences_use_case: FromDishka[GetPreferencesUseCase],
) -> dict:
    preferences = await get_preferences_use_case.execute(
        GetPreferencesRequest(user_id=caller.user_id)
    )
    return envelope(preferences)


@router.put("/me/preferences")
async def update_preferences(
    request: UpdatePreferencesAPIRequest,
    caller: CurrentCaller,
    update_preferences_use_case: FromDishka[UpdatePreferencesUseCase],
) -> dict:
    """Change notification and theme preferences. Omitted keys are kept."""
    preferences = await update_preferences_use_case.execute(
        UpdatePreferencesRequest(
            user_id=caller.user_id,
            email_notifications=request.email_notifications,
            push_notifications=request.push_notifications,
            theme=request.theme,
        )
    )
    return envelope(preferences)


@router.get("/{user_id}")
async def get_user_profile(
    user_id: UUID,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> dict:
    """Public profile with activity counters.

    Args:
        user_id: User UUID
        get_user_profile_use_case: Get user profile use case from DI

    Returns:
        Profile without email or preferences
    """
    profile = await get_user_profile_use_case.execute(
        GetUserProfileRequest(user_id=user_id)
    )
    return envelope(profile)
