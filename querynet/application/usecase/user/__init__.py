"""User use cases."""

from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UserProfile,
)
from .preferences import (
    GetPreferencesRequest,
    GetPreferencesUseCase,
    PreferencesView,
    UpdatePreferencesRequest,
    UpdatePreferencesUseCase,
)

__all__ = [
    "GetPreferencesRequest",
    "GetPreferencesUseCase",
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "PreferencesView",
    "UpdatePreferencesRequest",
    "UpdatePreferencesUseCase",
    "UserProfile",
]
