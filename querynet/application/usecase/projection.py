"""Read projection shared by question and answer use cases.

Scores are always reduced from vote ledgers at response-assembly time and
answer counts always come from a count query; neither is stored.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from querynet.application.usecase.base import ResponseModel
from querynet.domain.model import Answer, Question, User
from querynet.domain.service import AnswerService, UserService, VoteService
from querynet.domain.value import (
    QuestionStatus,
    UserId,
    VotableType,
    VoteDirection,
)


class AuthorSummary(ResponseModel):
    """Public author fields embedded in questions and answers."""

    id: str
    username: str
    avatar_url: Optional[str] = None
    reputation: int

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(
            id=str(user.id),
            username=user.username.root,
            avatar_url=user.avatar_url,
            reputation=user.reputation,
        )


class AnswerView(ResponseModel):
    """Answer as returned to clients."""

    id: str
    body: str
    question_id: str
    author: Optional[AuthorSummary]
    is_accepted: bool
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[str] = None
    vote_score: int
    user_vote: Optional[VoteDirection] = None
    created_at: datetime
    updated_at: datetime


class QuestionSummary(ResponseModel):
    """Question as listed in feeds."""

    id: str
    title: str
    body: str
    tags: list[str]
    author: Optional[AuthorSummary]
    views: int
    status: QuestionStatus
    vote_score: int
    answer_count: int
    has_accepted_answer: bool
    accepted_answer_id: Optional[str] = None
    is_pinned: bool
    is_featured: bool
    last_activity: datetime
    created_at: datetime
    updated_at: datetime


class QuestionView(QuestionSummary):
    """Question detail, including the caller's own vote."""

    user_vote: Optional[VoteDirection] = None


class ReadProjection:
    """Assembles questions and answers with derived scores and authors."""

    def __init__(
        self,
        vote_service: VoteService,
        answer_service: AnswerService,
        user_service: UserService,
    ) -> None:
        self.vote_service = vote_service
        self.answer_service = answer_service
        self.user_service = user_service

    async def answers(
        self, answers: Sequence[Answer], viewer_id: Optional[UserId] = None
    ) -> list[AnswerView]:
        """Project answers, keeping the given order."""
        ids: list[UUID] = [a.id for a in answers]
        scores = await self.vote_service.get_scores(VotableType.ANSWER, ids)
        votes = await self.vote_service.get_user_votes(viewer_id, VotableType.ANSWER, ids)
        authors = await self.user_service.get_by_ids([a.author_id for a in answers])

        return [
            AnswerView(
                id=str(a.id),
                body=a.body,
                question_id=str(a.question_id),
                author=_author(authors.get(a.author_id)),
                is_accepted=a.is_accepted,
                accepted_at=a.accepted_at,
                accepted_by=str(a.accepted_by) if a.accepted_by else None,
                vote_score=scores.get(a.id, 0),
                user_vote=votes.get(a.id),
                created_at=a.created_at,
                updated_at=a.updated_at,
            )
            for a in answers
        ]

    async def questions(self, questions: Sequence[Question]) -> list[QuestionSummary]:
        """Project a page of questions with scores and answer counts."""
        ids = [q.id for q in questions]
        scores = await self.vote_service.get_scores(VotableType.QUESTION, ids)
        answer_counts = await self.answer_service.count_by_questions(ids)
        authors = await self.user_service.get_by_ids([q.author_id for q in questions])

        return [
            QuestionSummary(
                **_question_fields(q),
                author=_author(authors.get(q.author_id)),
                vote_score=scores.get(q.id, 0),
                answer_count=answer_counts.get(q.id, 0),
            )
            for q in questions
        ]

    async def question(
        self,
        question: Question,
        answer_count: int,
        viewer_id: Optional[UserId] = None,
    ) -> QuestionView:
        """Project one question for its detail view."""
        ledger_scores = await self.vote_service.get_scores(
            VotableType.QUESTION, [question.id]
        )
        votes = await self.vote_service.get_user_votes(
            viewer_id, VotableType.QUESTION, [question.id]
        )
        authors = await self.user_service.get_by_ids([question.author_id])
        return QuestionView(
            **_question_fields(question),
            author=_author(authors.get(question.author_id)),
            vote_score=ledger_scores.get(question.id, 0),
            answer_count=answer_count,
            user_vote=votes.get(question.id),
        )


def _author(user: Optional[User]) -> Optional[AuthorSummary]:
    return AuthorSummary.from_user(user) if user else None


def _question_fields(q: Question) -> dict:
    return {
        "id": str(q.id),
        "title": q.title,
        "body": q.body,
        "tags": [tag.root for tag in q.tags],
        "views": q.views,
        "status": q.status,
        "has_accepted_answer": q.has_accepted_answer,
        "accepted_answer_id": str(q.accepted_answer_id) if q.accepted_answer_id else None,
        "is_pinned": q.is_pinned,
        "is_featured": q.is_featured,
        "last_activity": q.last_activity,
        "created_at": q.created_at,
        "updated_at": q.updated_at,
    }
