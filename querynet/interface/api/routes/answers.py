"""Answer routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from querynet.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    CreateAnswerRequest,
    CreateAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerUseCase,
    ListAnswersRequest,
    ListAnswersUseCase,
    UpdateAnswerRequest,
    UpdateAnswerUseCase,
)
from querynet.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from querynet.domain.error import ValidationError
from querynet.domain.value import VotableType
from querynet.interface.api.envelope import envelope
from querynet.interface.api.identity import CurrentCaller, MaybeCaller

router = APIRouter(prefix="/answers", tags=["answers"], route_class=DishkaRoute)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering. Accepts ``questionId``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    body: str = ""
    question_id: Optional[UUID] = None


class UpdateAnswerAPIRequest(BaseModel):
    body: str = ""


class VoteAPIRequest(BaseModel):
    type: Optional[str] = None


@router.get("/question/{question_id}")
async def list_answers(
    question_id: UUID,
    caller: MaybeCaller,
    list_answers_use_case: FromDishka[ListAnswersUseCase],
) -> dict:
    """Answers of a question, accepted first then oldest first."""
    answers = await list_answers_use_case.execute(
        ListAnswersRequest(
            question_id=question_id, user_id=caller.user_id if caller else None
        )
    )
    return envelope(answers, count=len(answers))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_answer(
    request: CreateAnswerAPIRequest,
    caller: CurrentCaller,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
) -> dict:
    """Answer a question. Returns the answer with its author populated."""
    if not request.body or request.question_id is None:
        raise ValidationError("Please provide answer body and question ID")
    answer = await create_answer_use_case.execute(
        CreateAnswerRequest(
            question_id=request.question_id,
            body=request.body,
            author_id=caller.user_id,
        )
    )
    return envelope(answer)


@router.put("/{answer_id}")
async def update_answer(
    answer_id: UUID,
    request: UpdateAnswerAPIRequest,
    caller: CurrentCaller,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
) -> dict:
    """Edit an answer. Only the author or an admin may edit."""
    answer = await update_answer_use_case.execute(
        UpdateAnswerRequest(
            answer_id=answer_id,
            body=request.body,
            user_id=caller.user_id,
            role=caller.role,
        )
    )
    return envelope(answer)


@router.delete("/{answer_id}")
async def delete_answer(
    answer_id: UUID,
    caller: CurrentCaller,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
) -> dict:
    message = await delete_answer_use_case.execute(
        DeleteAnswerRequest(answer_id=answer_id, user_id=caller.user_id, role=caller.role)
    )
    return envelope(message)


@router.post("/{answer_id}/vote")
async def vote_answer(
    answer_id: UUID,
    request: VoteAPIRequest,
    caller: CurrentCaller,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
) -> dict:
    """Upvote or downvote an answer; repeating a vote retracts it."""
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.ANSWER,
            votable_id=answer_id,
            direction=request.type,
            user_id=caller.user_id,
        )
    )
    return envelope(result)


@router.post("/{answer_id}/accept")
async def accept_answer(
    answer_id: UUID,
    caller: CurrentCaller,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
) -> dict:
    """Mark an answer as accepted. Only the question author may accept."""
    message = await accept_answer_use_case.execute(
        AcceptAnswerRequest(answer_id=answer_id, user_id=caller.user_id)
    )
    return envelope(message)
