"""PostgreSQL implementation of Question repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import asc, delete, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from querynet.domain.model import Question
from querynet.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from querynet.domain.value import AnswerId, QuestionId
from querynet.persistence.mappers import question_to_dict, row_to_question
from querynet.persistence.tables import questions_table


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, filters: QuestionFilter):
        if filters.status is not None:
            stmt = stmt.where(questions_table.c.status == filters.status.value)
        if filters.tag is not None:
            stmt = stmt.where(questions_table.c.tags.contains([filters.tag.root]))
        if filters.author_id is not None:
            stmt = stmt.where(questions_table.c.author_id == filters.author_id)
        if filters.search:
            # Literal substring match; no ranking
            stmt = stmt.where(
                or_(
                    questions_table.c.title.icontains(filters.search, autoescape=True),
                    questions_table.c.body.icontains(filters.search, autoescape=True),
                )
            )
        if filters.created_since is not None:
            stmt = stmt.where(questions_table.c.created_at >= filters.created_since)
        return stmt

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        stmt = select(questions_table).where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_question(row._asdict()) if row else None

    async def find_all(
        self,
        filters: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all", sort=sort.value, limit=limit, offset=offset
        ):
            stmt = self._apply_filters(select(questions_table), filters)

            if sort == QuestionSortOrder.OLDEST:
                stmt = stmt.order_by(asc(questions_table.c.created_at))
            elif sort == QuestionSortOrder.ACTIVITY:
                stmt = stmt.order_by(desc(questions_table.c.last_activity))
            elif sort == QuestionSortOrder.VIEWS:
                stmt = stmt.order_by(
                    desc(questions_table.c.views), desc(questions_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(questions_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)
            result = await self.session.execute(stmt)
            return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def count(self, filters: QuestionFilter) -> int:
        """Count questions matching the filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(questions_table), filters
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Views and the accepted-answer pointer are excluded from updates; they
        only change through their dedicated atomic statements.
        """
        question_dict = question_to_dict(question)

        existing = await self.find_by_id(question.id)
        if existing:
            question_dict.pop("views")
            question_dict.pop("accepted_answer_id")
            stmt = (
                update(questions_table)
                .where(questions_table.c.id == question.id)
                .values(**question_dict)
            )
        else:
            stmt = insert(questions_table).values(**question_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return question

    async def delete(self, question_id: QuestionId) -> bool:
        """Hard delete a question."""
        stmt = delete(questions_table).where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(views=questions_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def touch_activity(self, question_id: QuestionId, at: datetime) -> None:
        """Refresh last_activity."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(last_activity=at, updated_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def compare_and_set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        new: Optional[AnswerId],
        at: datetime,
    ) -> bool:
        """Conditional UPDATE on the accepted-answer pointer."""
        pointer = questions_table.c.accepted_answer_id
        condition = pointer.is_(None) if expected is None else pointer == expected
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id, condition)
            .values(accepted_answer_id=new, last_activity=at, updated_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1  # type: ignore[attr-defined]
