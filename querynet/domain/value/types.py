"""Domain value objects for QueryNet.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from querynet.domain.value.common import RootValueObject


class VoteDirection(str, Enum):
    """Direction of a vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @property
    def weight(self) -> int:
        """Contribution of one vote in this direction to a score."""
        return 1 if self is VoteDirection.UPVOTE else -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class QuestionStatus(str, Enum):
    """Lifecycle status of a question."""

    OPEN = "open"
    CLOSED = "closed"
    DUPLICATE = "duplicate"


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class Theme(str, Enum):
    """UI theme preference."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class NotificationType(str, Enum):
    """Kind of event a notification reports."""

    ANSWER = "answer"
    COMMENT = "comment"
    QUESTION = "question"
    BADGE = "badge"
    MENTION = "mention"
    VOTE = "vote"
    ACCEPT = "accept"


class UserStat(str, Enum):
    """Denormalized per-user counters."""

    QUESTIONS_ASKED = "questions_asked"
    ANSWERS_GIVEN = "answers_given"
    ACCEPTED_ANSWERS = "accepted_answers"
    UPVOTES_RECEIVED = "upvotes_received"
    DOWNVOTES_RECEIVED = "downvotes_received"


class TagName(RootValueObject[str]):
    """Tag attached to a question.

    Tags are normalized to lowercase. Allowed characters are letters, digits,
    and the separators ``-``, ``.``, ``+`` and ``#`` (``c++``, ``c#``, ``node.js``).
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_tag_name(cls, v: str) -> str:
        """Lowercase and trim before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9][a-z0-9.+#-]{0,34}$", v):
            raise ValueError(
                "Tag must be 1-35 characters: letters, digits, '-', '.', '+', '#'"
            )
        return v


class Username(RootValueObject[str]):
    """Public username."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username length and characters."""
        if len(v) < 3 or len(v) > 30:
            raise ValueError("Username must be 3-30 characters")
        if not re.match(r"^[A-Za-z0-9_.-]+$", v):
            raise ValueError(
                "Username may only contain letters, digits, '_', '.' and '-'"
            )
        return v


class Email(RootValueObject[str]):
    """Email address, stored lowercase."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lowercase and trim before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        if not re.match(r"^[^@\s]+@[^@\s]+\.[a-z]{2,}$", v):
            raise ValueError("Please add a valid email")
        return v
