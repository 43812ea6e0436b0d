"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.domain.service import QuestionService
from querynet.domain.value import QuestionId, UserId, UserRole


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: UUID
    user_id: str
    role: UserRole = UserRole.USER


class DeleteQuestionUseCase:
    """Use case for deleting a question with its answers (author or admin)."""

    def __init__(self, question_service: QuestionService) -> None:
        self.question_service = question_service

    async def execute(self, request: DeleteQuestionRequest) -> str:
        await self.question_service.delete_question(
            QuestionId(request.question_id),
            user_id=UserId(UUID(request.user_id)),
            role=request.role,
        )
        return "Question deleted successfully"
