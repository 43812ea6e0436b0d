"""Create question use case."""

from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.projection import QuestionView, ReadProjection
from querynet.domain.service import QuestionService
from querynet.domain.value import UserId


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str
    body: str
    tags: list[str]
    author_id: str  # From authenticated user


class CreateQuestionUseCase:
    """Use case for asking a new question."""

    def __init__(
        self, question_service: QuestionService, projection: ReadProjection
    ) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
            projection: Read projection for the response
        """
        self.question_service = question_service
        self.projection = projection

    async def execute(self, request: CreateQuestionRequest) -> QuestionView:
        """Create the question and return it in detail form.

        Raises:
            ValidationError: If title, body or tags are invalid
        """
        author_id = UserId(UUID(request.author_id))
        question = await self.question_service.create_question(
            author_id=author_id,
            title=request.title,
            body=request.body,
            tags=request.tags,
        )
        return await self.projection.question(question, answer_count=0, viewer_id=author_id)
