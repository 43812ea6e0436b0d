"""Authentication routes."""

import logging
from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from querynet.application.usecase.auth import (
    ChangePasswordRequest,
    ChangePasswordUseCase,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    ProfilePreferences,
    RegisterRequest,
    RegisterUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from querynet.config import Settings
from querynet.domain.value import Theme
from querynet.interface.api.envelope import envelope
from querynet.interface.api.identity import CurrentCaller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class RegisterAPIRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class LoginAPIRequest(BaseModel):
    email: str = ""
    password: str = ""


class ProfilePreferencesAPIRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    theme: Optional[Theme] = None


class UpdateProfileAPIRequest(BaseModel):
    username: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    preferences: Optional[ProfilePreferencesAPIRequest] = None


class ChangePasswordAPIRequest(BaseModel):
    """Accepts ``currentPassword`` and ``newPassword``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_password: str = ""
    new_password: str = ""


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the JWT as an HTTP-only cookie.

    Production serves the frontend from another origin, so the cookie must be
    ``SameSite=None; Secure`` there. Development stays on ``lax`` over HTTP.
    """
    is_production = settings.environment == "production"
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_hours * 60 * 60,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterAPIRequest,
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
    settings: FromDishka[Settings],
) -> dict:
    """Create an account, sign it in and set the auth cookie.

    Returns:
        ``data`` with the token and the new user
    """
    result = await register_use_case.execute(
        RegisterRequest(
            username=request.username, email=request.email, password=request.password
        )
    )
    _set_auth_cookie(response, result.token, settings)
    logger.info("User registered: %s", result.user.username)
    return envelope(result)


@router.post("/login")
async def login(
    request: LoginAPIRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> dict:
    """Check email and password, then set the auth cookie."""
    result = await login_use_case.execute(
        LoginRequest(email=request.email, password=request.password)
    )
    _set_auth_cookie(response, result.token, settings)
    return envelope(result)


@router.post("/logout")
async def logout(response: Response, settings: FromDishka[Settings]) -> dict:
    """Clear the auth cookie."""
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
    return envelope("Successfully logged out")


@router.get("/me")
async def get_current_user(
    caller: CurrentCaller,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> dict:
    """The signed-in user's own account."""
    user = await get_current_user_use_case.execute(
        GetCurrentUserRequest(user_id=caller.user_id)
    )
    return envelope(user)


@router.put("/profile")
async def update_profile(
    request: UpdateProfileAPIRequest,
    caller: CurrentCaller,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
) -> dict:
    """Edit the caller's username, bio, location, website or preferences."""
    preferences = (
        ProfilePreferences(**request.preferences.model_dump())
        if request.preferences is not None
        else None
    )
    user = await update_profile_use_case.execute(
        UpdateProfileRequest(
            user_id=caller.user_id,
            username=request.username,
            bio=request.bio,
            location=request.location,
            website=request.website,
            preferences=preferences,
        )
    )
    return envelope(user)


@router.put("/change-password")
async def change_password(
    request: ChangePasswordAPIRequest,
    caller: CurrentCaller,
    change_password_use_case: FromDishka[ChangePasswordUseCase],
) -> dict:
    """Replace the caller's password after checking the current one."""
    message = await change_password_use_case.execute(
        ChangePasswordRequest(
            user_id=caller.user_id,
            current_password=request.current_password,
            new_password=request.new_password,
        )
    )
    return envelope(message)
