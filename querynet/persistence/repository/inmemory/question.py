"""In-memory question repository for testing."""

from datetime import datetime
from typing import Optional

from querynet.domain.model.question import Question
from querynet.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from querynet.domain.value import AnswerId, QuestionId


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self) -> None:
        self._questions: dict[QuestionId, Question] = {}

    def _matching(self, filters: QuestionFilter) -> list[Question]:
        result = []
        for q in self._questions.values():
            if filters.status is not None and q.status != filters.status:
                continue
            if filters.tag is not None and filters.tag not in q.tags:
                continue
            if filters.author_id is not None and q.author_id != filters.author_id:
                continue
            if filters.search:
                needle = filters.search.lower()
                if needle not in q.title.lower() and needle not in q.body.lower():
                    continue
            if filters.created_since is not None and q.created_at < filters.created_since:
                continue
            result.append(q)
        return result

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        return self._questions.get(question_id)

    async def find_all(
        self,
        filters: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        questions = self._matching(filters)
        if sort == QuestionSortOrder.OLDEST:
            questions.sort(key=lambda q: q.created_at)
        elif sort == QuestionSortOrder.ACTIVITY:
            questions.sort(key=lambda q: q.last_activity, reverse=True)
        elif sort == QuestionSortOrder.VIEWS:
            questions.sort(key=lambda q: (q.views, q.created_at), reverse=True)
        else:
            questions.sort(key=lambda q: q.created_at, reverse=True)
        return questions[offset : offset + limit]

    async def count(self, filters: QuestionFilter) -> int:
        return len(self._matching(filters))

    async def save(self, question: Question) -> Question:
        """Save a question; views and the accepted pointer are kept on update."""
        existing = self._questions.get(question.id)
        if existing:
            question = question.model_copy(
                update={
                    "views": existing.views,
                    "accepted_answer_id": existing.accepted_answer_id,
                }
            )
        self._questions[question.id] = question
        return question

    async def delete(self, question_id: QuestionId) -> bool:
        return self._questions.pop(question_id, None) is not None

    async def increment_views(self, question_id: QuestionId) -> None:
        q = self._questions.get(question_id)
        if q:
            self._questions[question_id] = q.model_copy(update={"views": q.views + 1})

    async def touch_activity(self, question_id: QuestionId, at: datetime) -> None:
        q = self._questions.get(question_id)
        if q:
            self._questions[question_id] = q.model_copy(
                update={"last_activity": at, "updated_at": at}
            )

    async def compare_and_set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        new: Optional[AnswerId],
        at: datetime,
    ) -> bool:
        q = self._questions.get(question_id)
        if q is None or q.accepted_answer_id != expected:
            return False
        self._questions[question_id] = q.model_copy(
            update={"accepted_answer_id": new, "last_activity": at, "updated_at": at}
        )
        return True
