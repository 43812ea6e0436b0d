"""Unit tests for StatsService."""

import pytest

from querynet.domain.service import (
    AnswerService,
    QuestionService,
    StatsService,
    UserService,
)
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_empty_site(unit_env):
    service = await unit_env.get(StatsService)

    stats = await service.get_stats()

    assert stats.total_questions == 0
    assert stats.total_users == 0
    assert stats.questions_today == 0
    assert stats.answered_percentage == 0


@pytest.mark.asyncio
async def test_answered_percentage_is_rounded(unit_env):
    user_service = await unit_env.get(UserService)
    question_service = await unit_env.get(QuestionService)
    answer_service = await unit_env.get(AnswerService)
    service = await unit_env.get(StatsService)

    bob = await make_user(user_service, "bob")
    dave = await make_user(user_service, "dave")
    questions = [
        await make_question(question_service, bob, title=f"Question number {i} here")
        for i in range(3)
    ]
    # Two answers on one question still count it once
    await make_answer(answer_service, questions[0], dave)
    await make_answer(answer_service, questions[0], dave)

    stats = await service.get_stats()

    assert stats.total_questions == 3
    assert stats.total_users == 2
    assert stats.questions_today == 3
    assert stats.answered_percentage == 33
