"""Register use case."""

import logfire
from pydantic import BaseModel

from querynet.application.usecase.base import ResponseModel
from querynet.domain.service import JWTService, UserService

from .user_view import CurrentUser


class RegisterRequest(BaseModel):
    """Sign-up form."""

    username: str
    email: str
    password: str


class AuthResponse(ResponseModel):
    """Token plus the signed-in user, returned by register and login."""

    token: str
    user: CurrentUser


class RegisterUseCase:
    """Use case for creating an account and signing it in."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Execute registration flow.

        Raises:
            ValidationError: If a field is invalid or the user already exists
        """
        user = await self.user_service.register(
            username=request.username,
            email=request.email,
            password=request.password,
        )
        token = self.jwt_service.create_token(
            user_id=str(user.id), username=user.username.root, role=user.role.value
        )
        logfire.info("Registration complete", user_id=str(user.id))
        return AuthResponse(token=token, user=CurrentUser.from_user(user))
