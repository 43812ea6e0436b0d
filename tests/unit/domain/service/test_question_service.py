"""Unit tests for QuestionService."""

from uuid import uuid4

import pytest

from querynet.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from querynet.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
    VoteRepository,
)
from querynet.domain.service import (
    AnswerService,
    QuestionService,
    UserService,
    VoteService,
)
from querynet.domain.value import QuestionId, TagName, UserId, UserRole, VotableType
from tests.factories import QUESTION_BODY, make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateQuestion:
    @pytest.mark.asyncio
    async def test_create_counts_towards_author(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")

        question = await make_question(question_service, bob, tags=["Python", "asyncio"])

        assert question.tags == [TagName("python"), TagName("asyncio")]
        assert (await user_service.get_by_id(bob.id)).stats.questions_asked == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,tags",
        [
            ("short", ["python"]),
            ("A perfectly fine title", []),
            ("A perfectly fine title", ["a", "b", "c", "d", "e", "f"]),
            ("A perfectly fine title", ["no spaces allowed"]),
        ],
    )
    async def test_invalid_fields_are_rejected(self, unit_env, title, tags):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")

        with pytest.raises(ValidationError):
            await question_service.create_question(bob.id, title, QUESTION_BODY, tags)


class TestUpdateQuestion:
    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")
        question = await make_question(question_service, bob)

        updated = await question_service.update_question(
            question.id, bob.id, UserRole.USER, title="How do I await inside a for loop?"
        )

        assert updated.title == "How do I await inside a for loop?"
        assert updated.body == question.body
        assert updated.last_activity >= question.last_activity

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit_but_admin_can(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")
        carol = await make_user(user_service, "carol")
        question = await make_question(question_service, bob)

        with pytest.raises(NotAuthorizedError):
            await question_service.update_question(
                question.id, carol.id, UserRole.USER, tags=["java"]
            )

        updated = await question_service.update_question(
            question.id, carol.id, UserRole.ADMIN, tags=["java"]
        )
        assert updated.tags == [TagName("java")]


class TestDeleteQuestion:
    @pytest.mark.asyncio
    async def test_delete_cascades_answers_votes_and_counters(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        answer_service = await unit_env.get(AnswerService)
        vote_service = await unit_env.get(VoteService)
        answers = await unit_env.get(AnswerRepository)
        questions = await unit_env.get(QuestionRepository)
        votes = await unit_env.get(VoteRepository)

        bob = await make_user(user_service, "bob")
        dave = await make_user(user_service, "dave")
        alice = await make_user(user_service, "alice")
        question = await make_question(question_service, bob)
        a1 = await make_answer(answer_service, question, dave)
        a2 = await make_answer(answer_service, question, dave)
        await answer_service.accept_answer(a1.id, bob.id)
        await vote_service.apply_vote(VotableType.ANSWER, a2.id, alice.id, "upvote")
        await vote_service.apply_vote(VotableType.QUESTION, question.id, alice.id, "upvote")

        await question_service.delete_question(question.id, bob.id, UserRole.USER)

        assert await questions.find_by_id(question.id) is None
        assert await answers.find_by_question(question.id) == []
        assert await answers.find_by_id(a1.id) is None
        assert (await votes.get_ledger(VotableType.ANSWER, a2.id)).votes == ()
        assert (await votes.get_ledger(VotableType.QUESTION, question.id)).votes == ()

        dave_stats = (await user_service.get_by_id(dave.id)).stats
        assert dave_stats.answers_given == 0
        assert dave_stats.accepted_answers == 0
        assert (await user_service.get_by_id(bob.id)).stats.questions_asked == 0

    @pytest.mark.asyncio
    async def test_delete_missing_question(self, unit_env):
        question_service = await unit_env.get(QuestionService)

        with pytest.raises(NotFoundError):
            await question_service.delete_question(
                QuestionId(uuid4()), UserId(uuid4()), UserRole.ADMIN
            )


class TestListQuestions:
    @pytest.mark.asyncio
    async def test_filters_by_tag_and_search(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")
        await make_question(question_service, bob, title="How do I await in a loop?")
        await make_question(
            question_service, bob, title="Why is my Rust borrow failing?", tags=["rust"]
        )

        by_tag = await question_service.list_questions(
            QuestionFilter(tag=TagName("rust")), QuestionSortOrder.NEWEST, 1, 10
        )
        assert [q.title for q in by_tag.questions] == ["Why is my Rust borrow failing?"]

        by_search = await question_service.list_questions(
            QuestionFilter(search="  AWAIT "), QuestionSortOrder.NEWEST, 1, 10
        )
        assert by_search.total == 1

    @pytest.mark.asyncio
    async def test_search_wildcards_match_literally(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")
        await make_question(question_service, bob, title="How do I await in a loop?")
        await make_question(question_service, bob, title="Reaching 100% test coverage")

        percent = await question_service.list_questions(
            QuestionFilter(search="%"), QuestionSortOrder.NEWEST, 1, 10
        )
        underscore = await question_service.list_questions(
            QuestionFilter(search="_"), QuestionSortOrder.NEWEST, 1, 10
        )

        assert [q.title for q in percent.questions] == ["Reaching 100% test coverage"]
        assert underscore.total == 0

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        bob = await make_user(user_service, "bob")
        for i in range(5):
            await make_question(question_service, bob, title=f"Question number {i} here")

        page = await question_service.list_questions(
            QuestionFilter(), QuestionSortOrder.OLDEST, page=2, limit=2
        )

        assert page.total == 5
        assert page.pages == 3
        assert [q.title for q in page.questions] == [
            "Question number 2 here",
            "Question number 3 here",
        ]
