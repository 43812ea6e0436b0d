"""Delete answer use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.domain.service import AnswerService
from querynet.domain.value import AnswerId, UserId, UserRole


class DeleteAnswerRequest(BaseModel):
    answer_id: UUID
    user_id: str
    role: UserRole = UserRole.USER


class DeleteAnswerUseCase:
    """Use case for deleting an answer (author or admin)."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: DeleteAnswerRequest) -> str:
        await self.answer_service.delete_answer(
            AnswerId(request.answer_id),
            user_id=UserId(UUID(request.user_id)),
            role=request.role,
        )
        return "Answer deleted successfully"
