"""Get user profile use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import ResponseModel
from querynet.domain.service import UserService
from querynet.domain.value import UserId, UserRole


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: UUID


class ProfileStats(ResponseModel):
    questions_asked: int
    answers_given: int
    accepted_answers: int
    upvotes_received: int
    downvotes_received: int


class UserProfile(ResponseModel):
    """Public profile. Email and preferences are never exposed here."""

    id: str
    username: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    reputation: int
    role: UserRole
    is_verified: bool
    stats: ProfileStats
    last_active: datetime
    created_at: datetime


class GetUserProfileUseCase:
    """Use case for getting a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> UserProfile:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return UserProfile(
            id=str(user.id),
            username=user.username.root,
            avatar_url=user.avatar_url,
            bio=user.bio,
            location=user.location,
            website=user.website,
            reputation=user.reputation,
            role=user.role,
            is_verified=user.is_verified,
            stats=ProfileStats(**user.stats.model_dump()),
            last_active=user.last_active,
            created_at=user.created_at,
        )
