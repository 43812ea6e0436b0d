"""Profile update use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.domain.model import UserPreferences
from querynet.domain.service import UserService
from querynet.domain.value import Theme, UserId

from .user_view import CurrentUser


class ProfilePreferences(BaseModel):
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    theme: Optional[Theme] = None


class UpdateProfileRequest(BaseModel):
    """Partial profile update. Omitted fields keep their current value."""

    user_id: str  # From authenticated user
    username: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    preferences: Optional[ProfilePreferences] = None


class UpdateProfileUseCase:
    """Use case for editing the caller's own profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> CurrentUser:
        """Apply the given fields to the caller's account.

        Raises:
            NotFoundError: If user not found
            ValidationError: If a field is invalid or the username is taken
        """
        user_id = UserId(UUID(request.user_id))
        preferences: Optional[UserPreferences] = None
        if request.preferences is not None:
            user = await self.user_service.get_by_id(user_id)
            preferences = user.preferences.model_copy(
                update=request.preferences.model_dump(exclude_none=True)
            )

        user = await self.user_service.update_profile(
            user_id,
            username=request.username,
            bio=request.bio,
            location=request.location,
            website=request.website,
            preferences=preferences,
        )
        return CurrentUser.from_user(user)
