"""Private view of the signed-in user."""

from datetime import datetime
from typing import Optional

from querynet.application.usecase.base import ResponseModel
from querynet.domain.model import User
from querynet.domain.value import Theme, UserRole


class CurrentUser(ResponseModel):
    """The caller's own account, without the password hash."""

    id: str
    username: str
    email: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    reputation: int
    role: UserRole
    is_verified: bool
    email_notifications: bool
    push_notifications: bool
    theme: Theme
    last_active: datetime
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "CurrentUser":
        return cls(
            id=str(user.id),
            username=user.username.root,
            email=user.email.root,
            avatar_url=user.avatar_url,
            bio=user.bio,
            location=user.location,
            website=user.website,
            reputation=user.reputation,
            role=user.role,
            is_verified=user.is_verified,
            email_notifications=user.preferences.email_notifications,
            push_notifications=user.preferences.push_notifications,
            theme=user.preferences.theme,
            last_active=user.last_active,
            created_at=user.created_at,
        )
