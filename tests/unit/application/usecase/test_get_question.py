"""Unit tests for the question detail use case."""

from uuid import uuid4

import pytest

from querynet.application.usecase.question import (
    GetQuestionRequest,
    GetQuestionUseCase,
)
from querynet.domain.error import NotFoundError
from querynet.domain.service import (
    AnswerService,
    QuestionService,
    UserService,
    VoteService,
)
from querynet.domain.value import VotableType, VoteDirection
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_detail_counts_view_and_orders_answers(unit_env):
    user_service = await unit_env.get(UserService)
    question_service = await unit_env.get(QuestionService)
    answer_service = await unit_env.get(AnswerService)
    vote_service = await unit_env.get(VoteService)
    use_case = await unit_env.get(GetQuestionUseCase)

    bob = await make_user(user_service, "bob")
    dave = await make_user(user_service, "dave")
    alice = await make_user(user_service, "alice")
    question = await make_question(question_service, bob)
    first = await make_answer(answer_service, question, dave)
    second = await make_answer(answer_service, question, dave)
    await answer_service.accept_answer(second.id, bob.id)
    await vote_service.apply_vote(VotableType.QUESTION, question.id, alice.id, "upvote")
    await vote_service.apply_vote(VotableType.ANSWER, first.id, alice.id, "downvote")

    response = await use_case.execute(
        GetQuestionRequest(question_id=question.id, user_id=str(alice.id))
    )

    assert response.question.views == 1
    assert response.question.vote_score == 1
    assert response.question.user_vote is VoteDirection.UPVOTE
    assert response.question.answer_count == 2
    assert response.question.accepted_answer_id == str(second.id)
    assert [a.id for a in response.answers] == [str(second.id), str(first.id)]
    assert response.answers[1].vote_score == -1
    assert response.answers[1].user_vote is VoteDirection.DOWNVOTE
    assert response.answers[0].author.username == "dave"

    again = await use_case.execute(GetQuestionRequest(question_id=question.id))
    assert again.question.views == 2
    assert again.question.user_vote is None


@pytest.mark.asyncio
async def test_missing_question(unit_env):
    use_case = await unit_env.get(GetQuestionUseCase)

    with pytest.raises(NotFoundError):
        await use_case.execute(GetQuestionRequest(question_id=uuid4()))
