"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from querynet.domain.model.vote import Vote, VoteLedger
from querynet.domain.value import UserId, VotableType, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Votes are keyed by (votable_type, votable_id, user_id); the set of votes
    for one votable forms its ledger.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (question or answer)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items
            votable_ids: Item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def get_ledger(self, votable_type: VotableType, votable_id: UUID) -> VoteLedger:
        """Load the full vote ledger of one item.

        Args:
            votable_type: Type of item
            votable_id: ID of the item

        Returns:
            Ledger (empty when nobody voted)
        """
        pass

    @abstractmethod
    async def get_ledgers(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, VoteLedger]:
        """Load ledgers for several items in one query.

        Returns:
            Mapping with an entry (possibly empty) for every requested ID
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        Raises:
            IntegrityError: If the user already holds a vote on this item
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a vote was deleted, False if it no longer existed
        """
        pass

    @abstractmethod
    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items.

        Used when questions or answers are deleted.

        Returns:
            Number of votes removed
        """
        pass
