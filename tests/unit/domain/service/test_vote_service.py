"""Unit tests for VoteService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from querynet.domain.error import ConflictError, NotFoundError, ValidationError
from querynet.domain.repository import NotificationRepository, VoteRepository
from querynet.domain.service import (
    AnswerService,
    QuestionService,
    UserService,
    VoteService,
)
from querynet.domain.value import NotificationType, VotableType, VoteDirection
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _answer_fixture(env):
    user_service = await env.get(UserService)
    question_service = await env.get(QuestionService)
    answer_service = await env.get(AnswerService)
    bob = await make_user(user_service, "bob")
    dave = await make_user(user_service, "dave")
    question = await make_question(question_service, bob)
    answer = await make_answer(answer_service, question, dave)
    return question, answer, dave


class TestApplyVote:
    """Tests for apply_vote."""

    @pytest.mark.asyncio
    async def test_alice_upvote_toggle_then_downvote(self, unit_env):
        """Score goes 0 -> 1 -> 0 -> -1 and the ledger holds one downvote."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        alice = await make_user(await unit_env.get(UserService), "alice")
        _, a1, _ = await _answer_fixture(unit_env)

        first = await vote_service.apply_vote(VotableType.ANSWER, a1.id, alice.id, "upvote")
        assert first.vote_score == 1
        assert first.user_vote is VoteDirection.UPVOTE

        second = await vote_service.apply_vote(
            VotableType.ANSWER, a1.id, alice.id, "upvote"
        )
        assert second.vote_score == 0
        assert second.user_vote is None
        assert (
            await vote_repo.find_by_user_and_votable(alice.id, VotableType.ANSWER, a1.id)
            is None
        )

        third = await vote_service.apply_vote(
            VotableType.ANSWER, a1.id, alice.id, VoteDirection.DOWNVOTE
        )
        assert third.vote_score == -1
        ledger = await vote_repo.get_ledger(VotableType.ANSWER, a1.id)
        assert len(ledger.votes) == 1
        assert ledger.votes[0].direction is VoteDirection.DOWNVOTE

    @pytest.mark.asyncio
    async def test_score_is_recomputed_from_ledger(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        user_service = await unit_env.get(UserService)
        question_service = await unit_env.get(QuestionService)
        owner = await make_user(user_service, "owner")
        question = await make_question(question_service, owner)

        voters = [await make_user(user_service, f"voter{i}") for i in range(3)]
        for voter in voters:
            await vote_service.apply_vote(
                VotableType.QUESTION, question.id, voter.id, "upvote"
            )
        result = await vote_service.apply_vote(
            VotableType.QUESTION, question.id, voters[0].id, "downvote"
        )

        assert result.vote_score == 1
        scores = await vote_service.get_scores(VotableType.QUESTION, [question.id])
        assert scores[question.id] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("direction", ["sideways", "", "UPVOTE"])
    async def test_invalid_direction_is_rejected(self, unit_env, direction):
        vote_service = await unit_env.get(VoteService)
        _, answer, _ = await _answer_fixture(unit_env)

        with pytest.raises(ValidationError, match="valid vote type"):
            await vote_service.apply_vote(
                VotableType.ANSWER, answer.id, answer.author_id, direction
            )

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voter = await make_user(await unit_env.get(UserService), "alice")

        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                VotableType.QUESTION, uuid4(), voter.id, "upvote"
            )

    @pytest.mark.asyncio
    async def test_vote_notifies_author_but_retraction_does_not(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        notifications = await unit_env.get(NotificationRepository)
        alice = await make_user(await unit_env.get(UserService), "alice")
        _, answer, dave = await _answer_fixture(unit_env)

        await vote_service.apply_vote(VotableType.ANSWER, answer.id, alice.id, "upvote")
        await vote_service.apply_vote(VotableType.ANSWER, answer.id, alice.id, "upvote")

        received = await notifications.find_by_recipient(dave.id)
        assert [n.type for n in received] == [NotificationType.VOTE]
        assert received[0].data.answer_id == answer.id

    @pytest.mark.asyncio
    async def test_self_vote_sends_no_notification(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        notifications = await unit_env.get(NotificationRepository)
        _, answer, dave = await _answer_fixture(unit_env)

        await vote_service.apply_vote(VotableType.ANSWER, answer.id, dave.id, "upvote")

        assert await notifications.count_by_recipient(dave.id) == 0

    @pytest.mark.asyncio
    async def test_duplicate_insert_race_becomes_conflict(self, unit_env, monkeypatch):
        """A concurrent same-voter insert hits the unique constraint."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        alice = await make_user(await unit_env.get(UserService), "alice")
        _, answer, _ = await _answer_fixture(unit_env)

        async def racing_save(vote):
            raise IntegrityError("INSERT INTO votes", {}, Exception("unique_vote"))

        monkeypatch.setattr(vote_repo, "save", racing_save)

        with pytest.raises(ConflictError):
            await vote_service.apply_vote(
                VotableType.ANSWER, answer.id, alice.id, "upvote"
            )


class TestGetUserVotes:
    @pytest.mark.asyncio
    async def test_anonymous_viewer_has_no_votes(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        _, answer, _ = await _answer_fixture(unit_env)

        assert await vote_service.get_user_votes(None, VotableType.ANSWER, [answer.id]) == {}

    @pytest.mark.asyncio
    async def test_returns_direction_per_item(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        alice = await make_user(await unit_env.get(UserService), "alice")
        _, answer, _ = await _answer_fixture(unit_env)
        await vote_service.apply_vote(VotableType.ANSWER, answer.id, alice.id, "downvote")

        votes = await vote_service.get_user_votes(
            alice.id, VotableType.ANSWER, [answer.id, uuid4()]
        )
        assert votes == {answer.id: VoteDirection.DOWNVOTE}
