"""Login use case."""

import logfire
from pydantic import BaseModel

from querynet.domain.service import JWTService, UserService

from .register import AuthResponse
from .user_view import CurrentUser


class LoginRequest(BaseModel):
    """Email and password login."""

    email: str
    password: str


class LoginUseCase:
    """Use case for password login."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a token.

        Raises:
            AuthenticationError: If the credentials don't match
        """
        with logfire.span("login_user"):
            user = await self.user_service.authenticate(request.email, request.password)
            token = self.jwt_service.create_token(
                user_id=str(user.id), username=user.username.root, role=user.role.value
            )
            return AuthResponse(token=token, user=CurrentUser.from_user(user))
