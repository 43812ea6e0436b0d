"""Authentication use cases."""

from .change_password import ChangePasswordRequest, ChangePasswordUseCase
from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .login import LoginRequest, LoginUseCase
from .register import AuthResponse, RegisterRequest, RegisterUseCase
from .update_profile import ProfilePreferences, UpdateProfileRequest, UpdateProfileUseCase
from .user_view import CurrentUser

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "ChangePasswordUseCase",
    "CurrentUser",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginUseCase",
    "ProfilePreferences",
    "RegisterRequest",
    "RegisterUseCase",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
]
