"""List answers use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.projection import AnswerView, ReadProjection
from querynet.domain.service import AnswerService, QuestionService
from querynet.domain.value import QuestionId, UserId


class ListAnswersRequest(BaseModel):
    """List answers request."""

    question_id: UUID
    user_id: Optional[str] = None  # Current user ID (if authenticated)


class ListAnswersUseCase:
    """Use case for the answers of one question, in display order."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> None:
        self.question_service = question_service
        self.answer_service = answer_service
        self.projection = projection

    async def execute(self, request: ListAnswersRequest) -> list[AnswerView]:
        """Accepted answer first, then oldest first.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        question_id = QuestionId(request.question_id)
        await self.question_service.get_question(question_id)
        answers = await self.answer_service.list_for_question(question_id)
        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None
        return await self.projection.answers(answers, viewer_id=viewer_id)
