"""In-memory answer repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from querynet.domain.model.answer import Answer
from querynet.domain.repository.answer import AnswerRepository
from querynet.domain.value import AnswerId, QuestionId, UserId


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self) -> None:
        self._answers: dict[AnswerId, Answer] = {}

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        return self._answers.get(answer_id)

    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        answers = [a for a in self._answers.values() if a.question_id == question_id]
        answers.sort(key=lambda a: (not a.is_accepted, a.created_at))
        return answers

    async def count_by_question(self, question_id: QuestionId) -> int:
        return sum(1 for a in self._answers.values() if a.question_id == question_id)

    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        return {qid: await self.count_by_question(qid) for qid in question_ids}

    async def count_answered_questions(self) -> int:
        return len({a.question_id for a in self._answers.values()})

    async def save(self, answer: Answer) -> Answer:
        """Save an answer; acceptance fields are kept on update."""
        existing = self._answers.get(answer.id)
        if existing:
            answer = answer.model_copy(
                update={
                    "is_accepted": existing.is_accepted,
                    "accepted_at": existing.accepted_at,
                    "accepted_by": existing.accepted_by,
                }
            )
        self._answers[answer.id] = answer
        return answer

    async def delete(self, answer_id: AnswerId) -> bool:
        return self._answers.pop(answer_id, None) is not None

    async def delete_by_question(self, question_id: QuestionId) -> list[Answer]:
        removed = [a for a in self._answers.values() if a.question_id == question_id]
        for answer in removed:
            del self._answers[answer.id]
        return removed

    async def set_accepted(
        self, answer_id: AnswerId, accepted_by: UserId, at: datetime
    ) -> None:
        answer = self._answers.get(answer_id)
        if answer:
            self._answers[answer_id] = answer.model_copy(
                update={"is_accepted": True, "accepted_at": at, "accepted_by": accepted_by}
            )

    async def clear_accepted(self, answer_id: AnswerId) -> None:
        answer = self._answers.get(answer_id)
        if answer:
            self._answers[answer_id] = answer.model_copy(
                update={"is_accepted": False, "accepted_at": None, "accepted_by": None}
            )
