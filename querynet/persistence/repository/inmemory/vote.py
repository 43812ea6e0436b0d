"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from querynet.domain.model.vote import Vote, VoteLedger
from querynet.domain.repository.vote import VoteRepository
from querynet.domain.value import UserId, VotableType, VoteId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        for vote in self._votes:
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return vote
        return None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        wanted = set(votable_ids)
        return [
            v
            for v in self._votes
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def get_ledger(self, votable_type: VotableType, votable_id: UUID) -> VoteLedger:
        return VoteLedger(
            votable_type=votable_type,
            votable_id=votable_id,
            votes=tuple(
                v
                for v in self._votes
                if v.votable_type == votable_type and v.votable_id == votable_id
            ),
        )

    async def get_ledgers(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, VoteLedger]:
        return {vid: await self.get_ledger(votable_type, vid) for vid in votable_ids}

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already voted on this item
        """
        existing = await self.find_by_user_and_votable(
            vote.user_id, vote.votable_type, vote.votable_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        before = len(self._votes)
        self._votes = [v for v in self._votes if v.id != vote_id]
        return len(self._votes) < before

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> int:
        wanted = set(votable_ids)
        before = len(self._votes)
        self._votes = [
            v
            for v in self._votes
            if not (v.votable_type == votable_type and v.votable_id in wanted)
        ]
        return before - len(self._votes)
