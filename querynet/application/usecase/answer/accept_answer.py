"""Accept answer use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import BaseUseCase
from querynet.domain.service import AnswerService
from querynet.domain.value import AnswerId, UserId


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    answer_id: UUID
    user_id: str  # Must be the question author


class AcceptAnswerUseCase(BaseUseCase):
    """Use case for marking an answer as the accepted one."""

    def __init__(self, answer_service: AnswerService) -> None:
        self.answer_service = answer_service

    async def execute(self, request: AcceptAnswerRequest) -> str:
        """Accept the answer and return a confirmation message.

        Raises:
            NotFoundError: If answer or question not found
            NotAuthorizedError: If the caller is not the question author
            ConflictError: If a concurrent accept won
        """
        result = await self.answer_service.accept_answer(
            AnswerId(request.answer_id), UserId(UUID(request.user_id))
        )
        if not result.changed:
            return "Answer is already accepted"
        return "Answer accepted successfully"
