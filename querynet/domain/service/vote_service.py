"""Vote domain service."""

from dataclasses import dataclass
from typing import Optional, Sequence, Union
from uuid import UUID

import logfire
from sqlalchemy.exc import IntegrityError

from querynet.domain.error import ConflictError, NotFoundError, ValidationError
from querynet.domain.model import VoteLedger
from querynet.domain.model.notification import VotePayload
from querynet.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    VoteRepository,
)
from querynet.domain.value import (
    AnswerId,
    NotificationType,
    QuestionId,
    UserId,
    VotableType,
    VoteDirection,
)

from .base import Service
from .notification_service import NotificationService
from .question_service import QuestionService


@dataclass
class VoteResult:
    """Score and caller vote after a vote request."""

    vote_score: int
    user_vote: Optional[VoteDirection]
    ledger: VoteLedger


class VoteService(Service):
    """Domain service for vote operations.

    Scores are never stored; they are always reduced from the ledger.
    Votes do not feed reputation or the upvotes/downvotes_received counters.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        question_service: QuestionService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            question_repository: Question repository (existence checks)
            answer_repository: Answer repository (existence checks)
            question_service: Question domain service (activity timestamps)
            notification_service: Notification fan-out
        """
        self.vote_repository = vote_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.question_service = question_service
        self.notification_service = notification_service

    async def apply_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        voter_id: UserId,
        direction: Union[VoteDirection, str],
    ) -> VoteResult:
        """Apply a vote with toggle semantics.

        Voting the same direction twice retracts the vote, voting the other
        direction flips it, and voting with no existing vote casts one.

        Args:
            votable_type: Question or answer
            votable_id: ID of the voted item
            voter_id: Authenticated voter
            direction: "upvote" or "downvote"

        Returns:
            The recomputed score and the voter's resulting vote

        Raises:
            ValidationError: If direction is not upvote or downvote
            NotFoundError: If the item doesn't exist
            ConflictError: If a concurrent vote by the same voter won the race
        """
        try:
            direction = VoteDirection(direction)
        except ValueError:
            raise ValidationError(
                "Please provide a valid vote type (upvote or downvote)"
            )

        with logfire.span(
            "vote_service.apply_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            voter_id=str(voter_id),
            direction=direction.value,
        ):
            author_id, question_id, question_title = await self._load_votable(
                votable_type, votable_id
            )

            ledger = await self.vote_repository.get_ledger(votable_type, votable_id)
            new_ledger, change = ledger.apply(voter_id, direction)

            if change.removed is not None:
                await self.vote_repository.delete(change.removed.id)
            if change.added is not None:
                try:
                    await self.vote_repository.save(change.added)
                except IntegrityError:
                    logfire.warn(
                        "Concurrent vote by same voter",
                        voter_id=str(voter_id),
                        votable_id=str(votable_id),
                    )
                    raise ConflictError("Vote changed concurrently, please retry")

            await self.question_service.touch_activity(question_id)

            logfire.info(
                "Vote applied",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                retracted=change.is_retraction,
                score=new_ledger.score,
            )

            if change.added is not None and author_id != voter_id:
                verb = "upvoted" if direction is VoteDirection.UPVOTE else "downvoted"
                await self.notification_service.notify(
                    recipient_id=author_id,
                    type=NotificationType.VOTE,
                    title="New vote",
                    message=f'Someone {verb} your {votable_type.value} on "{question_title}"',
                    data=VotePayload(
                        question_id=question_id,
                        answer_id=(
                            AnswerId(votable_id)
                            if votable_type is VotableType.ANSWER
                            else None
                        ),
                        direction=direction,
                    ),
                    created_by=voter_id,
                )

            return VoteResult(
                vote_score=new_ledger.score,
                user_vote=change.user_vote,
                ledger=new_ledger,
            )

    async def _load_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> tuple[UserId, QuestionId, str]:
        """Return (author, parent question, question title) of a votable."""
        if votable_type is VotableType.QUESTION:
            question = await self.question_repository.find_by_id(QuestionId(votable_id))
            if not question:
                raise NotFoundError("Question", str(votable_id))
            return question.author_id, question.id, question.title

        answer = await self.answer_repository.find_by_id(AnswerId(votable_id))
        if not answer:
            raise NotFoundError("Answer", str(votable_id))
        question = await self.question_repository.find_by_id(answer.question_id)
        if not question:
            raise NotFoundError("Question", str(answer.question_id))
        return answer.author_id, question.id, question.title

    async def get_scores(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Scores of several items, reduced from their ledgers."""
        if not votable_ids:
            return {}
        ledgers = await self.vote_repository.get_ledgers(votable_type, votable_ids)
        return {vid: ledger.score for vid, ledger in ledgers.items()}

    async def get_user_votes(
        self,
        user_id: Optional[UserId],
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, VoteDirection]:
        """Directions the user voted on the given items (absent when no vote)."""
        if user_id is None or not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        return {vote.votable_id: vote.direction for vote in votes}
