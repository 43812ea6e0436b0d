"""Question aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from querynet.domain.model.common import DomainModel
from querynet.domain.value import AnswerId, QuestionId, QuestionStatus, TagName, UserId


class Question(DomainModel):
    """Question aggregate root.

    Invariants:
    - accepted_answer_id, when set, references an Answer of this question
      whose is_accepted flag is set (kept in sync by AnswerService)
    - last_activity is refreshed on every mutating write
    """

    id: QuestionId
    title: str = Field(min_length=10, max_length=200)
    body: str = Field(min_length=30, max_length=30000)
    author_id: UserId
    tags: list[TagName] = Field(min_length=1, max_length=5)
    views: int = Field(default=0, ge=0)
    status: QuestionStatus = QuestionStatus.OPEN
    accepted_answer_id: Optional[AnswerId] = None
    duplicate_of: Optional[QuestionId] = None
    closed_reason: Optional[str] = None
    closed_by: Optional[UserId] = None
    closed_at: Optional[datetime] = None
    is_pinned: bool = False
    is_featured: bool = False
    last_activity: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: list[TagName]) -> list[TagName]:
        """Drop duplicate tags, keeping first occurrence order."""
        seen: set[str] = set()
        unique = []
        for tag in v:
            if tag.root not in seen:
                seen.add(tag.root)
                unique.append(tag)
        return unique

    @property
    def has_accepted_answer(self) -> bool:
        return self.accepted_answer_id is not None
