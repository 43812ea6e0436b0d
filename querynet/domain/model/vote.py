"""Vote entity and vote ledger.

Every question and answer owns a ledger of votes. A user holds at most one
vote per item, and the item's score is always derived from its ledger.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field, model_validator

from querynet.domain.model.common import DomainModel
from querynet.domain.value import UserId, VotableType, VoteDirection, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by the ledger and a unique constraint)
    - Upvotes count +1, downvotes count -1
    - Polymorphic reference to votable (question or answer)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # QuestionId or AnswerId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)


class VoteChange(DomainModel):
    """Result of applying a vote request to a ledger."""

    removed: Optional[Vote] = None
    added: Optional[Vote] = None

    @property
    def user_vote(self) -> Optional[VoteDirection]:
        """Direction the voter holds after the change (None after retraction)."""
        return self.added.direction if self.added else None

    @property
    def is_retraction(self) -> bool:
        return self.removed is not None and self.added is None


class VoteLedger(DomainModel):
    """All votes attached to one question or answer."""

    votable_type: VotableType
    votable_id: UUID
    votes: tuple[Vote, ...] = ()

    @model_validator(mode="after")
    def validate_one_vote_per_voter(self) -> "VoteLedger":
        """A voter may appear at most once, and only for this item."""
        voters = [vote.user_id for vote in self.votes]
        if len(voters) != len(set(voters)):
            raise ValueError("A user can hold only one vote per item")
        for vote in self.votes:
            if (
                vote.votable_type != self.votable_type
                or vote.votable_id != self.votable_id
            ):
                raise ValueError("Vote does not belong to this ledger")
        return self

    @property
    def upvotes(self) -> int:
        return sum(1 for v in self.votes if v.direction is VoteDirection.UPVOTE)

    @property
    def downvotes(self) -> int:
        return sum(1 for v in self.votes if v.direction is VoteDirection.DOWNVOTE)

    @property
    def score(self) -> int:
        """Upvotes minus downvotes, reduced over the whole ledger."""
        return sum(vote.direction.weight for vote in self.votes)

    def vote_of(self, user_id: UserId) -> Optional[Vote]:
        """Return the vote held by ``user_id``, if any."""
        return next((v for v in self.votes if v.user_id == user_id), None)

    def apply(
        self,
        user_id: UserId,
        direction: VoteDirection,
        now: Optional[datetime] = None,
    ) -> tuple["VoteLedger", VoteChange]:
        """Apply a vote request with toggle semantics.

        - Same direction as the existing vote: the vote is retracted.
        - Opposite direction: the existing vote is replaced.
        - No existing vote: a new vote is cast.

        Args:
            user_id: The voter
            direction: Requested direction
            now: Timestamp for a newly added vote

        Returns:
            The resulting ledger and the change that produced it
        """
        existing = self.vote_of(user_id)
        remaining = tuple(v for v in self.votes if v.user_id != user_id)

        if existing is not None and existing.direction == direction:
            change = VoteChange(removed=existing)
            return self.model_copy(update={"votes": remaining}), change

        added = Vote(
            id=VoteId(uuid4()),
            user_id=user_id,
            votable_type=self.votable_type,
            votable_id=self.votable_id,
            direction=direction,
            created_at=now or datetime.now(),
        )
        change = VoteChange(removed=existing, added=added)
        return self.model_copy(update={"votes": remaining + (added,)}), change
