"""Change password use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from querynet.domain.service import UserService
from querynet.domain.value import UserId


class ChangePasswordRequest(BaseModel):
    user_id: str  # From authenticated user
    current_password: str
    new_password: str


class ChangePasswordUseCase:
    """Use case for replacing the caller's password."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ChangePasswordRequest) -> str:
        """Check the current password and store the new one.

        Raises:
            ValidationError: If the current password is wrong or the new one is invalid
        """
        with logfire.span("change_password", user_id=request.user_id):
            await self.user_service.change_password(
                UserId(UUID(request.user_id)),
                request.current_password,
                request.new_password,
            )
            return "Password changed successfully"
