"""Update answer use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.projection import AnswerView, ReadProjection
from querynet.domain.service import AnswerService
from querynet.domain.value import AnswerId, UserId, UserRole


class UpdateAnswerRequest(BaseModel):
    answer_id: UUID
    body: str
    user_id: str
    role: UserRole = UserRole.USER


class UpdateAnswerUseCase:
    """Use case for editing an answer (author or admin)."""

    def __init__(self, answer_service: AnswerService, projection: ReadProjection) -> None:
        self.answer_service = answer_service
        self.projection = projection

    async def execute(self, request: UpdateAnswerRequest) -> AnswerView:
        user_id = UserId(UUID(request.user_id))
        answer = await self.answer_service.update_answer(
            AnswerId(request.answer_id),
            user_id=user_id,
            role=request.role,
            body=request.body,
        )
        [view] = await self.projection.answers([answer], viewer_id=user_id)
        return view
