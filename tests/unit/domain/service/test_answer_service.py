"""Unit tests for AnswerService, acceptance in particular."""

import pytest

from querynet.domain.error import ConflictError, NotAuthorizedError, ValidationError
from querynet.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
)
from querynet.domain.service import (
    AnswerService,
    QuestionService,
    UserService,
    VoteService,
)
from querynet.domain.value import NotificationType, UserRole, VotableType
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _bob_question_with_two_answers(unit_env):
    user_service = await unit_env.get(UserService)
    question_service = await unit_env.get(QuestionService)
    answer_service = await unit_env.get(AnswerService)

    bob = await make_user(user_service, "bob")
    dave = await make_user(user_service, "dave")
    erin = await make_user(user_service, "erin")
    question = await make_question(question_service, bob)
    a1 = await make_answer(answer_service, question, dave)
    a2 = await make_answer(answer_service, question, erin)
    return bob, dave, erin, question, a1, a2


class TestCreateAnswer:
    @pytest.mark.asyncio
    async def test_counts_answer_and_notifies_question_author(self, unit_env):
        bob, dave, _, question, a1, _ = await _bob_question_with_two_answers(unit_env)
        user_service = await unit_env.get(UserService)
        notifications = await unit_env.get(NotificationRepository)

        assert (await user_service.get_by_id(dave.id)).stats.answers_given == 1
        received = await notifications.find_by_recipient(bob.id)
        assert len(received) == 2
        assert all(n.type is NotificationType.ANSWER for n in received)
        assert {n.data.answer_id for n in received} >= {a1.id}

    @pytest.mark.asyncio
    async def test_answering_own_question_sends_no_notification(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        answer_service = await unit_env.get(AnswerService)
        notifications = await unit_env.get(NotificationRepository)
        bob = await make_user(user_service, "bob")
        question = await make_question(question_service, bob)

        await make_answer(answer_service, question, bob)

        assert await notifications.count_by_recipient(bob.id) == 0

    @pytest.mark.asyncio
    async def test_short_body_is_rejected(self, unit_env):
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        answer_service = await unit_env.get(AnswerService)
        bob = await make_user(user_service, "bob")
        question = await make_question(question_service, bob)

        with pytest.raises(ValidationError):
            await answer_service.create_answer(question.id, bob.id, "too short")


class TestAcceptAnswer:
    @pytest.mark.asyncio
    async def test_bob_accepts_a1_then_a2(self, unit_env):
        """Moving acceptance leaves exactly one accepted answer."""
        bob, dave, erin, question, a1, a2 = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        vote_service = await unit_env.get(VoteService)
        answers = await unit_env.get(AnswerRepository)
        questions = await unit_env.get(QuestionRepository)
        user_service = await unit_env.get(UserService)

        await answer_service.accept_answer(a1.id, bob.id)
        assert (await answers.find_by_id(a1.id)).is_accepted
        scores = await vote_service.get_scores(VotableType.ANSWER, [a1.id])
        assert scores[a1.id] == 0

        result = await answer_service.accept_answer(a2.id, bob.id)

        assert result.changed
        assert result.previous_id == a1.id
        assert not (await answers.find_by_id(a1.id)).is_accepted
        assert (await answers.find_by_id(a2.id)).is_accepted
        assert (await questions.find_by_id(question.id)).accepted_answer_id == a2.id
        accepted = [a for a in await answers.find_by_question(question.id) if a.is_accepted]
        assert [a.id for a in accepted] == [a2.id]

        assert (await user_service.get_by_id(dave.id)).stats.accepted_answers == 0
        assert (await user_service.get_by_id(erin.id)).stats.accepted_answers == 1

    @pytest.mark.asyncio
    async def test_carol_cannot_accept_on_bobs_question(self, unit_env):
        bob, _, _, question, a1, _ = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        answers = await unit_env.get(AnswerRepository)
        questions = await unit_env.get(QuestionRepository)
        carol = await make_user(await unit_env.get(UserService), "carol")

        with pytest.raises(NotAuthorizedError, match="Only the question author"):
            await answer_service.accept_answer(a1.id, carol.id)

        assert not (await answers.find_by_id(a1.id)).is_accepted
        assert (await questions.find_by_id(question.id)).accepted_answer_id is None

    @pytest.mark.asyncio
    async def test_reaccepting_current_answer_changes_nothing(self, unit_env):
        bob, dave, _, _, a1, _ = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        user_service = await unit_env.get(UserService)

        await answer_service.accept_answer(a1.id, bob.id)
        result = await answer_service.accept_answer(a1.id, bob.id)

        assert not result.changed
        assert (await user_service.get_by_id(dave.id)).stats.accepted_answers == 1

    @pytest.mark.asyncio
    async def test_stale_pointer_raises_conflict(self, unit_env):
        """A concurrent accept moved the pointer after we read the question."""
        bob, _, _, question, a1, a2 = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        questions = await unit_env.get(QuestionRepository)

        original_find = questions.find_by_id

        async def stale_find(question_id):
            snapshot = await original_find(question_id)
            # Another request accepts a2 between our read and our swap
            await questions.compare_and_set_accepted_answer(
                question.id, None, a2.id, snapshot.updated_at
            )
            return snapshot

        questions.find_by_id = stale_find

        with pytest.raises(ConflictError):
            await answer_service.accept_answer(a1.id, bob.id)

    @pytest.mark.asyncio
    async def test_accept_notifies_answer_author(self, unit_env):
        bob, dave, _, _, a1, _ = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        notifications = await unit_env.get(NotificationRepository)

        await answer_service.accept_answer(a1.id, bob.id)

        received = await notifications.find_by_recipient(dave.id)
        assert [n.type for n in received] == [NotificationType.ACCEPT]


class TestDeleteAnswer:
    @pytest.mark.asyncio
    async def test_deleting_accepted_answer_clears_pointer(self, unit_env):
        bob, dave, _, question, a1, _ = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)
        questions = await unit_env.get(QuestionRepository)
        user_service = await unit_env.get(UserService)

        await answer_service.accept_answer(a1.id, bob.id)
        await answer_service.delete_answer(a1.id, dave.id, UserRole.USER)

        assert (await questions.find_by_id(question.id)).accepted_answer_id is None
        stats = (await user_service.get_by_id(dave.id)).stats
        assert stats.accepted_answers == 0
        assert stats.answers_given == 0

    @pytest.mark.asyncio
    async def test_only_author_or_admin_may_delete(self, unit_env):
        bob, _, _, _, a1, _ = await _bob_question_with_two_answers(unit_env)
        answer_service = await unit_env.get(AnswerService)

        with pytest.raises(NotAuthorizedError):
            await answer_service.delete_answer(a1.id, bob.id, UserRole.USER)

        await answer_service.delete_answer(a1.id, bob.id, UserRole.ADMIN)
