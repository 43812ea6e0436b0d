"""Question domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from querynet.domain.error import NotFoundError, ValidationError
from querynet.domain.model import Question
from querynet.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
    VoteRepository,
)
from querynet.domain.value import (
    AnswerId,
    QuestionId,
    UserId,
    UserRole,
    UserStat,
    VotableType,
)

from .base import Service
from .user_service import UserService


@dataclass
class QuestionPage:
    """One page of a question listing."""

    questions: list[Question]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


class QuestionService(Service):
    """Domain service for question operations."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        user_service: UserService,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository (cascade deletes)
            vote_repository: Vote repository (cascade deletes)
            user_service: User domain service (stat counters)
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.vote_repository = vote_repository
        self.user_service = user_service

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question by ID.

        Raises:
            NotFoundError: If question not found
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))
            return question

    async def create_question(
        self,
        author_id: UserId,
        title: str,
        body: str,
        tags: list[str],
    ) -> Question:
        """Create a question and count it towards the author's stats.

        Args:
            author_id: Asking user
            title: Title (10-200 characters)
            body: Body (30-30000 characters)
            tags: 1-5 tag names

        Returns:
            The created question

        Raises:
            ValidationError: If a field is invalid
        """
        with logfire.span("question_service.create_question", author_id=str(author_id)):
            now = datetime.now()
            question = _build(
                {
                    "id": QuestionId(uuid4()),
                    "title": title,
                    "body": body,
                    "author_id": author_id,
                    "tags": tags,
                    "last_activity": now,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            saved = await self.question_repository.save(question)
            await self.user_service.adjust_stat(author_id, UserStat.QUESTIONS_ASKED, 1)
            logfire.info(
                "Question created", question_id=str(saved.id), author_id=str(author_id)
            )
            return saved

    async def update_question(
        self,
        question_id: QuestionId,
        user_id: UserId,
        role: UserRole,
        title: Optional[str] = None,
        body: Optional[str] = None,
        tags: Optional[list[str]] = None,
    ) -> Question:
        """Edit a question (author or admin only).

        Raises:
            NotFoundError: If question not found
            NotAuthorizedError: If the caller is not the author or an admin
            ValidationError: If an edited field is invalid
        """
        with logfire.span("question_service.update_question", question_id=str(question_id)):
            question = await self.get_question(question_id)
            self.ensure_owner_or_admin(
                question.author_id, user_id, role, "Not authorized to update this question"
            )

            now = datetime.now()
            changes: dict = {"updated_at": now, "last_activity": now}
            if title is not None:
                changes["title"] = title
            if body is not None:
                changes["body"] = body
            if tags is not None:
                changes["tags"] = tags

            updated = _build({**question.model_dump(), **changes})
            saved = await self.question_repository.save(updated)
            logfire.info("Question updated", question_id=str(question_id))
            return saved

    async def delete_question(
        self, question_id: QuestionId, user_id: UserId, role: UserRole
    ) -> None:
        """Delete a question together with its answers and all their votes.

        Counters are adjusted for every removed entity: the question author's
        questions_asked, each answer author's answers_given, and the accepted
        answer author's accepted_answers.

        Raises:
            NotFoundError: If question not found
            NotAuthorizedError: If the caller is not the author or an admin
        """
        with logfire.span("question_service.delete_question", question_id=str(question_id)):
            question = await self.get_question(question_id)
            self.ensure_owner_or_admin(
                question.author_id, user_id, role, "Not authorized to delete this question"
            )

            answers = await self.answer_repository.delete_by_question(question_id)
            await self.vote_repository.delete_by_votables(
                VotableType.ANSWER, [answer.id for answer in answers]
            )
            await self.vote_repository.delete_by_votables(
                VotableType.QUESTION, [question_id]
            )
            await self.question_repository.delete(question_id)

            for answer in answers:
                await self.user_service.adjust_stat(
                    answer.author_id, UserStat.ANSWERS_GIVEN, -1
                )
                if answer.is_accepted:
                    await self.user_service.adjust_stat(
                        answer.author_id, UserStat.ACCEPTED_ANSWERS, -1
                    )
            await self.user_service.adjust_stat(
                question.author_id, UserStat.QUESTIONS_ASKED, -1
            )
            logfire.info(
                "Question deleted",
                question_id=str(question_id),
                answers_removed=len(answers),
            )

    async def list_questions(
        self,
        filters: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        page: int = 1,
        limit: int = 10,
    ) -> QuestionPage:
        """List questions with filtering, sorting and pagination."""
        with logfire.span(
            "question_service.list_questions", sort=sort.value, page=page, limit=limit
        ):
            questions = await self.question_repository.find_all(
                filters, sort=sort, limit=limit, offset=(page - 1) * limit
            )
            total = await self.question_repository.count(filters)
            return QuestionPage(questions=questions, total=total, page=page, limit=limit)

    async def count_questions(self, filters: QuestionFilter) -> int:
        return await self.question_repository.count(filters)

    async def record_view(self, question_id: QuestionId) -> None:
        await self.question_repository.increment_views(question_id)

    async def touch_activity(self, question_id: QuestionId) -> None:
        await self.question_repository.touch_activity(question_id, datetime.now())

    async def move_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        new: Optional[AnswerId],
    ) -> bool:
        """Compare-and-swap the accepted-answer pointer.

        Returns:
            True if the pointer moved, False if it no longer equals ``expected``
        """
        return await self.question_repository.compare_and_set_accepted_answer(
            question_id, expected, new, datetime.now()
        )


def _build(data: dict) -> Question:
    try:
        return Question.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        message = str(first["msg"]).removeprefix("Value error, ")
        raise ValidationError(f"{field}: {message}" if field else message)
