"""User aggregate root.

Users ask questions, give answers, and accumulate stats through community
engagement.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from querynet.domain.model.common import DomainModel
from querynet.domain.value import Email, Theme, UserId, Username, UserRole, UserStat
from querynet.domain.value.common import ValueObject


class UserStats(ValueObject):
    """Denormalized activity counters.

    These are a cache of counts derivable from questions, answers and votes.
    Every mutation path adjusts them in the same transaction as the write
    that justifies them.
    """

    questions_asked: int = Field(default=0, ge=0)
    answers_given: int = Field(default=0, ge=0)
    accepted_answers: int = Field(default=0, ge=0)
    # Reserved: votes do not currently feed these counters
    upvotes_received: int = Field(default=0, ge=0)
    downvotes_received: int = Field(default=0, ge=0)

    def get(self, stat: UserStat) -> int:
        return getattr(self, stat.value)


class UserPreferences(ValueObject):
    """Notification and display preferences."""

    email_notifications: bool = True
    push_notifications: bool = True
    theme: Theme = Theme.SYSTEM


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    email: Email
    password_hash: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = Field(default=None, max_length=200)
    reputation: int = Field(default=1, ge=0)
    role: UserRole = UserRole.USER
    is_verified: bool = False
    preferences: UserPreferences = UserPreferences()
    stats: UserStats = UserStats()
    last_active: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
