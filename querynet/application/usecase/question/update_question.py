"""Update question use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.projection import QuestionView, ReadProjection
from querynet.domain.service import AnswerService, QuestionService
from querynet.domain.value import QuestionId, UserId, UserRole


class UpdateQuestionRequest(BaseModel):
    """Update question request. Omitted fields are left unchanged."""

    question_id: UUID
    user_id: str
    role: UserRole = UserRole.USER
    title: Optional[str] = None
    body: Optional[str] = None
    tags: Optional[list[str]] = None


class UpdateQuestionUseCase:
    """Use case for editing a question (author or admin)."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> None:
        self.question_service = question_service
        self.answer_service = answer_service
        self.projection = projection

    async def execute(self, request: UpdateQuestionRequest) -> QuestionView:
        user_id = UserId(UUID(request.user_id))
        question = await self.question_service.update_question(
            QuestionId(request.question_id),
            user_id=user_id,
            role=request.role,
            title=request.title,
            body=request.body,
            tags=request.tags,
        )
        counts = await self.answer_service.count_by_questions([question.id])
        return await self.projection.question(
            question, answer_count=counts.get(question.id, 0), viewer_id=user_id
        )
