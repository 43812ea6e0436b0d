"""Integration tests for the PostgreSQL repositories.

These tests assume a migrated postgres database reachable through the
``DATABASE__*`` settings. They run with ``pytest -m integration``.
"""

from datetime import datetime
from uuid import uuid4

import pytest

from querynet.domain.model import Answer, Notification, Question, User, Vote
from querynet.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionFilter,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from querynet.domain.value import (
    AnswerId,
    Email,
    NotificationId,
    NotificationType,
    QuestionId,
    TagName,
    UserId,
    Username,
    UserStat,
    VotableType,
    VoteDirection,
    VoteId,
)
from tests.factories import ANSWER_BODY, QUESTION_BODY
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


def _user() -> User:
    suffix = uuid4().hex[:8]
    return User(
        id=UserId(uuid4()),
        username=Username(f"user_{suffix}"),
        email=Email(f"{suffix}@example.com"),
        password_hash="not-a-real-hash",
    )


async def _question(
    env, author: User, tag: str, title: str = "How do I await in a loop?"
) -> Question:
    now = datetime.now()
    question = Question(
        id=QuestionId(uuid4()),
        title=title,
        body=QUESTION_BODY,
        author_id=author.id,
        tags=[TagName(tag)],
        last_activity=now,
        created_at=now,
        updated_at=now,
    )
    return await (await env.get(QuestionRepository)).save(question)


class TestQuestionRepository:
    @pytest.mark.asyncio
    async def test_tag_filter_and_views(self, integration_env):
        users = await integration_env.get(UserRepository)
        questions = await integration_env.get(QuestionRepository)
        author = await users.save(_user())
        tag = f"t{uuid4().hex[:10]}"
        question = await _question(integration_env, author, tag)

        await questions.increment_views(question.id)
        found = await questions.find_all(QuestionFilter(tag=TagName(tag)))

        assert [q.id for q in found] == [question.id]
        assert found[0].views == 1
        assert found[0].tags == [TagName(tag)]

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_as_text(self, integration_env):
        users = await integration_env.get(UserRepository)
        questions = await integration_env.get(QuestionRepository)
        author = await users.save(_user())
        tag = f"t{uuid4().hex[:10]}"
        await _question(integration_env, author, tag)
        covered = await _question(
            integration_env, author, tag, title="Reaching 100% test coverage"
        )

        percent = await questions.find_all(QuestionFilter(tag=TagName(tag), search="%"))
        underscore = await questions.find_all(
            QuestionFilter(tag=TagName(tag), search="_")
        )

        assert [q.id for q in percent] == [covered.id]
        assert underscore == []

    @pytest.mark.asyncio
    async def test_accepted_pointer_compare_and_set(self, integration_env):
        users = await integration_env.get(UserRepository)
        questions = await integration_env.get(QuestionRepository)
        answers = await integration_env.get(AnswerRepository)
        author = await users.save(_user())
        question = await _question(integration_env, author, "python")
        now = datetime.now()
        answer = await answers.save(
            Answer(
                id=AnswerId(uuid4()),
                body=ANSWER_BODY,
                question_id=question.id,
                author_id=author.id,
                created_at=now,
                updated_at=now,
            )
        )

        assert await questions.compare_and_set_accepted_answer(
            question.id, None, answer.id, now
        )
        assert not await questions.compare_and_set_accepted_answer(
            question.id, None, answer.id, now
        )
        reloaded = await questions.find_by_id(question.id)
        assert reloaded.accepted_answer_id == answer.id


class TestVoteRepository:
    @pytest.mark.asyncio
    async def test_ledger_and_bulk_delete(self, integration_env):
        users = await integration_env.get(UserRepository)
        votes = await integration_env.get(VoteRepository)
        author = await users.save(_user())
        voter = await users.save(_user())
        question = await _question(integration_env, author, "python")

        await votes.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=voter.id,
                votable_type=VotableType.QUESTION,
                votable_id=question.id,
                direction=VoteDirection.DOWNVOTE,
            )
        )
        ledger = await votes.get_ledger(VotableType.QUESTION, question.id)
        assert ledger.score == -1

        removed = await votes.delete_by_votables(VotableType.QUESTION, [question.id])
        assert removed == 1


class TestUserAndNotificationRepository:
    @pytest.mark.asyncio
    async def test_stat_counter_floor(self, integration_env):
        users = await integration_env.get(UserRepository)
        user = await users.save(_user())

        await users.increment_stat(user.id, UserStat.ANSWERS_GIVEN, 1)
        await users.increment_stat(user.id, UserStat.ANSWERS_GIVEN, -2)

        assert (await users.find_by_id(user.id)).stats.answers_given == 0

    @pytest.mark.asyncio
    async def test_mark_all_read_counts_changed_rows(self, integration_env):
        users = await integration_env.get(UserRepository)
        notifications = await integration_env.get(NotificationRepository)
        recipient = await users.save(_user())
        for _ in range(3):
            await notifications.save(
                Notification(
                    id=NotificationId(uuid4()),
                    recipient_id=recipient.id,
                    type=NotificationType.QUESTION,
                    title="Title",
                    message="Message",
                )
            )

        assert await notifications.mark_all_read(recipient.id, datetime.now()) == 3
        assert await notifications.count_by_recipient(recipient.id, is_read=False) == 0
