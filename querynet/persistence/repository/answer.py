"""PostgreSQL implementation of Answer repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import asc, delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from querynet.domain.model import Answer
from querynet.domain.repository import AnswerRepository
from querynet.domain.value import AnswerId, QuestionId, UserId
from querynet.persistence.mappers import answer_to_dict, row_to_answer
from querynet.persistence.tables import answers_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Answers of a question, accepted first then oldest first."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.question_id == question_id)
            .order_by(desc(answers_table.c.is_accepted), asc(answers_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def count_by_question(self, question_id: QuestionId) -> int:
        stmt = (
            select(func.count())
            .select_from(answers_table)
            .where(answers_table.c.question_id == question_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        """Answer counts for several questions with one GROUP BY."""
        counts: dict[QuestionId, int] = {qid: 0 for qid in question_ids}
        if not question_ids:
            return counts
        stmt = (
            select(answers_table.c.question_id, func.count())
            .where(answers_table.c.question_id.in_(list(question_ids)))
            .group_by(answers_table.c.question_id)
        )
        result = await self.session.execute(stmt)
        for question_id, count in result.all():
            counts[QuestionId(question_id)] = count
        return counts

    async def count_answered_questions(self) -> int:
        stmt = select(func.count(func.distinct(answers_table.c.question_id)))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update).

        Acceptance columns are excluded from updates; they only change
        through ``set_accepted`` and ``clear_accepted``.
        """
        answer_dict = answer_to_dict(answer)
        existing = await self.find_by_id(answer.id)
        if existing:
            for key in ("is_accepted", "accepted_at", "accepted_by"):
                answer_dict.pop(key)
            stmt = (
                update(answers_table)
                .where(answers_table.c.id == answer.id)
                .values(**answer_dict)
            )
        else:
            stmt = insert(answers_table).values(**answer_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return answer

    async def delete(self, answer_id: AnswerId) -> bool:
        stmt = delete(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Delete all answers of a question and return them."""
        stmt = (
            delete(answers_table)
            .where(answers_table.c.question_id == question_id)
            .returning(*answers_table.c)
        )
        result = await self.session.execute(stmt)
        removed = [row_to_answer(row._asdict()) for row in result.fetchall()]
        await self.session.flush()
        return removed

    async def set_accepted(
        self, answer_id: AnswerId, accepted_by: UserId, at: datetime
    ) -> None:
        stmt = (
            update(answers_table)
            .where(answers_table.c.id == answer_id)
            .values(is_accepted=True, accepted_at=at, accepted_by=accepted_by)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def clear_accepted(self, answer_id: AnswerId) -> None:
        stmt = (
            update(answers_table)
            .where(answers_table.c.id == answer_id)
            .values(is_accepted=False, accepted_at=None, accepted_by=None)
        )
        await self.session.execute(stmt)
        await self.session.flush()
