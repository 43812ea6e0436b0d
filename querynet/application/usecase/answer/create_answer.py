"""Create answer use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.projection import AnswerView, ReadProjection
from querynet.domain.service import AnswerService
from querynet.domain.value import QuestionId, UserId


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: UUID
    body: str
    author_id: str  # From authenticated user


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService, projection: ReadProjection) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
            projection: Read projection for the populated response
        """
        self.answer_service = answer_service
        self.projection = projection

    async def execute(self, request: CreateAnswerRequest) -> AnswerView:
        """Post the answer and return it with its author populated.

        Raises:
            NotFoundError: If the question doesn't exist
            ValidationError: If the body is invalid
        """
        author_id = UserId(UUID(request.author_id))
        answer = await self.answer_service.create_answer(
            question_id=QuestionId(request.question_id),
            author_id=author_id,
            body=request.body,
        )
        [view] = await self.projection.answers([answer], viewer_id=author_id)
        return view
