"""List questions use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import Pagination, ResponseModel
from querynet.application.usecase.projection import QuestionSummary, ReadProjection
from querynet.config import PaginationSettings
from querynet.domain.error import ValidationError
from querynet.domain.repository import QuestionFilter, QuestionSortOrder
from querynet.domain.service import QuestionService
from querynet.domain.value import QuestionStatus, TagName, UserId


class ListQuestionsRequest(BaseModel):
    """List questions request.

    The main feed only shows open questions. Listings by author include
    every status.
    """

    page: int = 1
    limit: Optional[int] = None
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    search: Optional[str] = None
    tag: Optional[str] = None
    author_id: Optional[UUID] = None


class ListQuestionsResponse(ResponseModel):
    """List questions response."""

    questions: list[QuestionSummary]
    pagination: Pagination


class ListQuestionsUseCase:
    """Use case for question feeds (all, by tag, by author)."""

    def __init__(
        self,
        question_service: QuestionService,
        projection: ReadProjection,
        pagination: PaginationSettings,
    ) -> None:
        self.question_service = question_service
        self.projection = projection
        self.pagination = pagination

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Raises:
            ValidationError: If the tag name is malformed
        """
        page = max(1, request.page)
        limit = min(
            max(1, request.limit or self.pagination.default_limit),
            self.pagination.max_limit,
        )

        tag = None
        if request.tag is not None:
            try:
                tag = TagName(request.tag)
            except ValueError:
                raise ValidationError(f"Invalid tag: {request.tag}")

        filters = QuestionFilter(
            status=None if request.author_id else QuestionStatus.OPEN,
            tag=tag,
            author_id=UserId(request.author_id) if request.author_id else None,
            search=request.search,
        )
        result = await self.question_service.list_questions(
            filters, sort=request.sort, page=page, limit=limit
        )
        return ListQuestionsResponse(
            questions=await self.projection.questions(result.questions),
            pagination=Pagination.of(page=page, limit=limit, total=result.total),
        )
