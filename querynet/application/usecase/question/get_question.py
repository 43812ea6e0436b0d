"""Get question use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import ResponseModel
from querynet.application.usecase.projection import (
    AnswerView,
    QuestionView,
    ReadProjection,
)
from querynet.domain.service import AnswerService, QuestionService
from querynet.domain.value import QuestionId, UserId


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: UUID
    user_id: Optional[str] = None  # Current user ID (if authenticated)


class GetQuestionResponse(ResponseModel):
    """Question detail with its answers."""

    question: QuestionView
    answers: list[AnswerView]


class GetQuestionUseCase:
    """Use case for the question detail page."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            projection: Read projection
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.projection = projection

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Load a question, count the view and assemble the detail view.

        The view counter is incremented atomically; the returned question
        already includes this view.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        question_id = QuestionId(request.question_id)
        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None

        question = await self.question_service.get_question(question_id)
        await self.question_service.record_view(question_id)
        question = question.model_copy(update={"views": question.views + 1})

        answers = await self.answer_service.list_for_question(question_id)
        return GetQuestionResponse(
            question=await self.projection.question(
                question, answer_count=len(answers), viewer_id=viewer_id
            ),
            answers=await self.projection.answers(answers, viewer_id=viewer_id),
        )
