"""Question repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from querynet.domain.model.question import Question
from querynet.domain.value import AnswerId, QuestionId, QuestionStatus, TagName, UserId


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC
    ACTIVITY = "activity"  # last_activity DESC
    VIEWS = "views"  # views DESC


class QuestionFilter:
    """Filters shared by list and count queries."""

    def __init__(
        self,
        status: Optional[QuestionStatus] = QuestionStatus.OPEN,
        tag: Optional[TagName] = None,
        author_id: Optional[UserId] = None,
        search: Optional[str] = None,
        created_since: Optional[datetime] = None,
    ) -> None:
        self.status = status
        self.tag = tag
        self.author_id = author_id
        self.search = search.strip() if search and search.strip() else None
        self.created_since = created_since


class QuestionRepository(ABC):
    """Repository for Question aggregate."""

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filters: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering and pagination.

        Args:
            filters: Status, tag, author, search and date filters
            sort: Sort order
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, filters: QuestionFilter) -> int:
        """Count questions matching the given filters."""
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def delete(self, question_id: QuestionId) -> bool:
        """Delete a question (hard delete).

        Returns:
            True if the question existed
        """
        pass

    @abstractmethod
    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter by 1."""
        pass

    @abstractmethod
    async def touch_activity(self, question_id: QuestionId, at: datetime) -> None:
        """Set last_activity (and updated_at) to ``at``."""
        pass

    @abstractmethod
    async def compare_and_set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        new: Optional[AnswerId],
        at: datetime,
    ) -> bool:
        """Move the accepted-answer pointer only if it still equals ``expected``.

        This is a single conditional UPDATE, so two concurrent accept requests
        cannot both succeed from the same observed state.

        Args:
            question_id: The question
            expected: Pointer value the caller observed
            new: Pointer value to store
            at: Activity timestamp

        Returns:
            True if the pointer was moved, False if it had changed meanwhile
        """
        pass
