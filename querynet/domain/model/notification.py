"""Notification entity.

Notifications are created as a side effect of another entity's state change
(new answer, accepted answer, vote). Clients can only read, toggle the read
flag, or delete their own notifications.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, model_validator

from querynet.domain.model.common import DomainModel
from querynet.domain.value import (
    AnswerId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
    VoteDirection,
)
from querynet.domain.value.common import ValueObject


class _Payload(ValueObject):
    url: Optional[str] = Field(default=None, max_length=500)


class AnswerPayload(_Payload):
    """A new answer was posted on the recipient's question."""

    kind: Literal["answer"] = "answer"
    question_id: QuestionId
    answer_id: AnswerId


class AcceptPayload(_Payload):
    """The recipient's answer was accepted."""

    kind: Literal["accept"] = "accept"
    question_id: QuestionId
    answer_id: AnswerId


class VotePayload(_Payload):
    """Someone voted on the recipient's question or answer."""

    kind: Literal["vote"] = "vote"
    question_id: QuestionId
    answer_id: Optional[AnswerId] = None
    direction: VoteDirection


class QuestionPayload(_Payload):
    kind: Literal["question"] = "question"
    question_id: QuestionId


class CommentPayload(_Payload):
    kind: Literal["comment"] = "comment"
    question_id: QuestionId
    answer_id: Optional[AnswerId] = None


class MentionPayload(_Payload):
    kind: Literal["mention"] = "mention"
    user_id: UserId
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None


class BadgePayload(_Payload):
    kind: Literal["badge"] = "badge"
    badge_id: UUID


NotificationPayload = Annotated[
    Union[
        AnswerPayload,
        AcceptPayload,
        VotePayload,
        QuestionPayload,
        CommentPayload,
        MentionPayload,
        BadgePayload,
    ],
    Field(discriminator="kind"),
]


class Notification(DomainModel):
    """Notification delivered to a single recipient."""

    id: NotificationId
    recipient_id: UserId
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=500)
    is_read: bool = False
    read_at: Optional[datetime] = None
    data: Optional[NotificationPayload] = None
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_payload_kind(self) -> "Notification":
        """The payload variant must match the notification type."""
        if self.data is not None and self.data.kind != self.type.value:
            raise ValueError(
                f"{self.data.kind} payload cannot be attached to "
                f"a {self.type.value} notification"
            )
        return self
