"""Answer repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from querynet.domain.model.answer import Answer
from querynet.domain.value import AnswerId, QuestionId, UserId


class AnswerRepository(ABC):
    """Repository for Answer entity."""

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find all answers of a question.

        Returns:
            Answers ordered accepted first, then oldest first
        """
        pass

    @abstractmethod
    async def count_by_question(self, question_id: QuestionId) -> int:
        """Count answers of one question."""
        pass

    @abstractmethod
    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        """Count answers for several questions in one query.

        Returns:
            Mapping with an entry (possibly 0) for every requested ID
        """
        pass

    @abstractmethod
    async def count_answered_questions(self) -> int:
        """Count distinct questions that have at least one answer."""
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId) -> bool:
        """Delete an answer.

        Returns:
            True if the answer existed
        """
        pass

    @abstractmethod
    async def delete_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Delete all answers of a question.

        Returns:
            The answers that were removed
        """
        pass

    @abstractmethod
    async def set_accepted(
        self,
        answer_id: AnswerId,
        accepted_by: UserId,
        at: datetime,
    ) -> None:
        """Mark an answer accepted and record when and by whom."""
        pass

    @abstractmethod
    async def clear_accepted(self, answer_id: AnswerId) -> None:
        """Clear an answer's acceptance flag and metadata."""
        pass
