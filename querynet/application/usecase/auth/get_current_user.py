"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.domain.service import UserService
from querynet.domain.value import UserId

from .user_view import CurrentUser


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: str  # From the verified token


class GetCurrentUserUseCase:
    """Use case for fetching the signed-in user's own account."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> CurrentUser:
        """Load the caller.

        Raises:
            NotFoundError: If the account was deleted after the token was issued
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        return CurrentUser.from_user(user)
