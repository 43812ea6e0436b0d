"""Notification and display preference use cases."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import ResponseModel
from querynet.domain.model import UserPreferences
from querynet.domain.service import UserService
from querynet.domain.value import Theme, UserId


class PreferencesView(ResponseModel):
    email_notifications: bool
    push_notifications: bool
    theme: Theme

    @classmethod
    def from_preferences(cls, preferences: UserPreferences) -> "PreferencesView":
        return cls(**preferences.model_dump())


class GetPreferencesRequest(BaseModel):
    user_id: str  # From authenticated user


class UpdatePreferencesRequest(BaseModel):
    """Partial update. Omitted fields keep their current value."""

    user_id: str  # From authenticated user
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    theme: Optional[Theme] = None


class GetPreferencesUseCase:
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetPreferencesRequest) -> PreferencesView:
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        return PreferencesView.from_preferences(user.preferences)


class UpdatePreferencesUseCase:
    """Use case for changing the caller's preferences."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdatePreferencesRequest) -> PreferencesView:
        """Merge the given fields into the stored preferences.

        Raises:
            NotFoundError: If user not found
        """
        user_id = UserId(UUID(request.user_id))
        user = await self.user_service.get_by_id(user_id)
        changes = request.model_dump(exclude={"user_id"}, exclude_none=True)
        preferences = user.preferences.model_copy(update=changes)
        updated = await self.user_service.update_preferences(user_id, preferences)
        return PreferencesView.from_preferences(updated.preferences)
