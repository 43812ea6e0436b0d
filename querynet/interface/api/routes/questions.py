"""Question routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from querynet.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionUseCase,
)
from querynet.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from querynet.domain.repository import QuestionSortOrder
from querynet.domain.value import VotableType
from querynet.interface.api.envelope import envelope
from querynet.interface.api.identity import CurrentCaller, MaybeCaller

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = ""
    body: str = ""
    tags: list[str] = []


class UpdateQuestionAPIRequest(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    tags: Optional[list[str]] = None


class VoteAPIRequest(BaseModel):
    type: Optional[str] = None


async def _list(use_case: ListQuestionsUseCase, request: ListQuestionsRequest) -> dict:
    result = await use_case.execute(request)
    return envelope(
        result.questions, count=len(result.questions), pagination=result.pagination
    )


@router.get("")
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    page: int = 1,
    limit: Optional[int] = None,
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
    search: Optional[str] = None,
) -> dict:
    """List open questions.

    Args:
        page: 1-based page number
        limit: Page size (clamped to the configured maximum)
        sort: newest, oldest, activity or views
        search: Substring matched against title and body
    """
    return await _list(
        list_questions_use_case,
        ListQuestionsRequest(page=page, limit=limit, sort=sort, search=search),
    )


@router.get("/tag/{tag}")
async def list_questions_by_tag(
    tag: str,
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    page: int = 1,
    limit: Optional[int] = None,
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
) -> dict:
    """List open questions carrying a tag."""
    return await _list(
        list_questions_use_case,
        ListQuestionsRequest(page=page, limit=limit, sort=sort, tag=tag),
    )


@router.get("/user/{user_id}")
async def list_questions_by_user(
    user_id: UUID,
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    page: int = 1,
    limit: Optional[int] = None,
) -> dict:
    """List every question asked by a user, whatever its status."""
    return await _list(
        list_questions_use_case,
        ListQuestionsRequest(page=page, limit=limit, author_id=user_id),
    )


@router.get("/{question_id}")
async def get_question(
    question_id: UUID,
    caller: MaybeCaller,
    get_question_use_case: FromDishka[GetQuestionUseCase],
) -> dict:
    """Question detail with its answers. Counts one view."""
    result = await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=question_id, user_id=caller.user_id if caller else None
        )
    )
    return envelope(result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    request: CreateQuestionAPIRequest,
    caller: CurrentCaller,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
) -> dict:
    """Ask a question. Requires authentication."""
    question = await create_question_use_case.execute(
        CreateQuestionRequest(
            title=request.title,
            body=request.body,
            tags=request.tags,
            author_id=caller.user_id,
        )
    )
    return envelope(question)


@router.put("/{question_id}")
async def update_question(
    question_id: UUID,
    request: UpdateQuestionAPIRequest,
    caller: CurrentCaller,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
) -> dict:
    """Edit a question. Only the author or an admin may edit."""
    question = await update_question_use_case.execute(
        UpdateQuestionRequest(
            question_id=question_id,
            user_id=caller.user_id,
            role=caller.role,
            title=request.title,
            body=request.body,
            tags=request.tags,
        )
    )
    return envelope(question)


@router.delete("/{question_id}")
async def delete_question(
    question_id: UUID,
    caller: CurrentCaller,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
) -> dict:
    """Delete a question with its answers and votes."""
    message = await delete_question_use_case.execute(
        DeleteQuestionRequest(
            question_id=question_id, user_id=caller.user_id, role=caller.role
        )
    )
    return envelope(message)


@router.post("/{question_id}/vote")
async def vote_question(
    question_id: UUID,
    request: VoteAPIRequest,
    caller: CurrentCaller,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
) -> dict:
    """Upvote or downvote a question; repeating a vote retracts it."""
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.QUESTION,
            votable_id=question_id,
            direction=request.type,
            user_id=caller.user_id,
        )
    )
    return envelope(result)
