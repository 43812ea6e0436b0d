"""Answer domain service.

Owns the acceptance state machine: a question points at no more than one
accepted answer, and that answer is the only one of the question whose
``is_accepted`` flag is set.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from querynet.domain.error import (
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from querynet.domain.model import Answer, Question
from querynet.domain.model.notification import AcceptPayload, AnswerPayload
from querynet.domain.repository import AnswerRepository, VoteRepository
from querynet.domain.value import (
    AnswerId,
    NotificationType,
    QuestionId,
    UserId,
    UserRole,
    UserStat,
    VotableType,
)

from .base import Service
from .notification_service import NotificationService
from .question_service import QuestionService
from .user_service import UserService


@dataclass
class AcceptResult:
    """Outcome of an accept request."""

    question_id: QuestionId
    accepted: Answer
    previous_id: Optional[AnswerId]
    changed: bool


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        question_service: QuestionService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            vote_repository: Vote repository (cascade deletes)
            question_service: Question domain service
            user_service: User domain service (stat counters)
            notification_service: Notification fan-out
        """
        self.answer_repository = answer_repository
        self.vote_repository = vote_repository
        self.question_service = question_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If answer not found
        """
        with logfire.span("answer_service.get_answer", answer_id=str(answer_id)):
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                logfire.warn("Answer not found", answer_id=str(answer_id))
                raise NotFoundError("Answer", str(answer_id))
            return answer

    async def list_for_question(self, question_id: QuestionId) -> list[Answer]:
        """Answers of a question, accepted first then oldest first."""
        return await self.answer_repository.find_by_question(question_id)

    async def count_by_questions(
        self, question_ids: list[QuestionId]
    ) -> dict[QuestionId, int]:
        if not question_ids:
            return {}
        return await self.answer_repository.count_by_questions(question_ids)

    async def create_answer(
        self, question_id: QuestionId, author_id: UserId, body: str
    ) -> Answer:
        """Post an answer to an existing question.

        Bumps the author's answers_given, refreshes the question's activity
        and notifies the question author.

        Raises:
            NotFoundError: If the question doesn't exist
            ValidationError: If the body is invalid
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author_id),
        ):
            question = await self.question_service.get_question(question_id)

            now = datetime.now()
            answer = _build(
                {
                    "id": AnswerId(uuid4()),
                    "body": body,
                    "author_id": author_id,
                    "question_id": question_id,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            saved = await self.answer_repository.save(answer)
            await self.question_service.touch_activity(question_id)
            await self.user_service.adjust_stat(author_id, UserStat.ANSWERS_GIVEN, 1)
            logfire.info(
                "Answer created", answer_id=str(saved.id), question_id=str(question_id)
            )

            if question.author_id != author_id:
                await self.notification_service.notify(
                    recipient_id=question.author_id,
                    type=NotificationType.ANSWER,
                    title="New answer",
                    message=f'Your question "{question.title}" has a new answer',
                    data=AnswerPayload(question_id=question_id, answer_id=saved.id),
                    created_by=author_id,
                )
            return saved

    async def update_answer(
        self, answer_id: AnswerId, user_id: UserId, role: UserRole, body: str
    ) -> Answer:
        """Edit an answer's body (author or admin only).

        Raises:
            NotFoundError: If answer not found
            NotAuthorizedError: If the caller is not the author or an admin
            ValidationError: If the body is invalid
        """
        with logfire.span("answer_service.update_answer", answer_id=str(answer_id)):
            answer = await self.get_answer(answer_id)
            self.ensure_owner_or_admin(
                answer.author_id, user_id, role, "Not authorized to update this answer"
            )
            updated = _build(
                {**answer.model_dump(), "body": body, "updated_at": datetime.now()}
            )
            saved = await self.answer_repository.save(updated)
            await self.question_service.touch_activity(answer.question_id)
            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

    async def delete_answer(
        self, answer_id: AnswerId, user_id: UserId, role: UserRole
    ) -> None:
        """Delete an answer and its votes (author or admin only).

        Deleting the accepted answer clears the question's pointer and takes
        the accepted answer back from its author's stats.

        Raises:
            NotFoundError: If answer not found
            NotAuthorizedError: If the caller is not the author or an admin
            ConflictError: If acceptance moved while the answer was being deleted
        """
        with logfire.span("answer_service.delete_answer", answer_id=str(answer_id)):
            answer = await self.get_answer(answer_id)
            self.ensure_owner_or_admin(
                answer.author_id, user_id, role, "Not authorized to delete this answer"
            )

            if answer.is_accepted:
                cleared = await self.question_service.move_accepted_answer(
                    answer.question_id, expected=answer.id, new=None
                )
                if not cleared:
                    raise ConflictError("Accepted answer changed, please retry")
                await self.user_service.adjust_stat(
                    answer.author_id, UserStat.ACCEPTED_ANSWERS, -1
                )

            await self.vote_repository.delete_by_votables(VotableType.ANSWER, [answer.id])
            await self.answer_repository.delete(answer.id)
            await self.user_service.adjust_stat(
                answer.author_id, UserStat.ANSWERS_GIVEN, -1
            )
            await self.question_service.touch_activity(answer.question_id)
            logfire.info(
                "Answer deleted",
                answer_id=str(answer_id),
                was_accepted=answer.is_accepted,
            )

    async def accept_answer(self, answer_id: AnswerId, user_id: UserId) -> AcceptResult:
        """Accept an answer on behalf of the question author.

        Steps:
        1. Only the question author may accept; anyone else is rejected.
        2. Accepting the current accepted answer changes nothing.
        3. The question pointer is moved with a compare-and-swap from the
           observed previous answer to the target, so a concurrent accept
           on the same question fails with ConflictError instead of leaving
           two accepted answers.
        4. The previous answer loses its flag and its author loses one
           accepted_answers; the target gains both.
        5. The target answer's author is notified.

        Args:
            answer_id: Answer to accept
            user_id: Caller (must be the question author)

        Returns:
            AcceptResult describing the transition

        Raises:
            NotFoundError: If answer or question not found
            NotAuthorizedError: If the caller is not the question author
            ConflictError: If another request moved the pointer first
        """
        with logfire.span(
            "answer_service.accept_answer", answer_id=str(answer_id), user_id=str(user_id)
        ):
            answer = await self.get_answer(answer_id)
            question = await self.question_service.get_question(answer.question_id)

            if question.author_id != user_id:
                logfire.warn(
                    "Accept attempt by non-author",
                    answer_id=str(answer_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError("Only the question author can accept answers")

            previous_id = question.accepted_answer_id
            if previous_id == answer.id:
                logfire.info("Answer already accepted", answer_id=str(answer_id))
                return AcceptResult(
                    question_id=question.id,
                    accepted=answer,
                    previous_id=previous_id,
                    changed=False,
                )

            swapped = await self.question_service.move_accepted_answer(
                question.id, expected=previous_id, new=answer.id
            )
            if not swapped:
                logfire.warn(
                    "Concurrent accept detected",
                    question_id=str(question.id),
                    answer_id=str(answer_id),
                )
                raise ConflictError("Accepted answer changed, please retry")

            if previous_id is not None:
                await self._release_previous(previous_id)

            now = datetime.now()
            await self.answer_repository.set_accepted(answer.id, user_id, now)
            await self.user_service.adjust_stat(
                answer.author_id, UserStat.ACCEPTED_ANSWERS, 1
            )
            accepted = answer.model_copy(
                update={"is_accepted": True, "accepted_at": now, "accepted_by": user_id}
            )
            logfire.info(
                "Answer accepted",
                question_id=str(question.id),
                answer_id=str(answer_id),
                previous_id=str(previous_id) if previous_id else None,
            )

            if answer.author_id != user_id:
                await self._notify_accepted(question, accepted)

            return AcceptResult(
                question_id=question.id,
                accepted=accepted,
                previous_id=previous_id,
                changed=True,
            )

    async def _release_previous(self, previous_id: AnswerId) -> None:
        previous = await self.answer_repository.find_by_id(previous_id)
        if previous is None:
            # Pointer referenced an answer that is already gone
            logfire.warn("Previously accepted answer missing", answer_id=str(previous_id))
            return
        await self.answer_repository.clear_accepted(previous_id)
        if previous.is_accepted:
            await self.user_service.adjust_stat(
                previous.author_id, UserStat.ACCEPTED_ANSWERS, -1
            )

    async def _notify_accepted(self, question: Question, answer: Answer) -> None:
        await self.notification_service.notify(
            recipient_id=answer.author_id,
            type=NotificationType.ACCEPT,
            title="Answer accepted",
            message=f'Your answer to "{question.title}" was accepted',
            data=AcceptPayload(question_id=question.id, answer_id=answer.id),
            created_by=question.author_id,
        )


def _build(data: dict) -> Answer:
    try:
        return Answer.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        message = str(first["msg"])
        raise ValidationError(f"{field}: {message}" if field else message)
