"""Answer entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from querynet.domain.model.common import DomainModel
from querynet.domain.value import AnswerId, QuestionId, UserId


class Answer(DomainModel):
    """Answer to a question.

    is_accepted is only ever changed through AnswerService.accept_answer,
    which keeps it consistent with Question.accepted_answer_id.
    """

    id: AnswerId
    body: str = Field(min_length=30, max_length=30000)
    author_id: UserId
    question_id: QuestionId
    is_accepted: bool = False
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
