"""PostgreSQL implementation of Vote repository."""

from collections import defaultdict
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from querynet.domain.model import Vote, VoteLedger
from querynet.domain.repository import VoteRepository
from querynet.domain.value import UserId, VotableType, VoteId
from querynet.persistence.mappers import row_to_vote, vote_to_dict
from querynet.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(list(votable_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def get_ledger(self, votable_type: VotableType, votable_id: UUID) -> VoteLedger:
        """Load every vote on one item."""
        ledgers = await self.get_ledgers(votable_type, [votable_id])
        return ledgers[votable_id]

    async def get_ledgers(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, VoteLedger]:
        """Load ledgers for several items in a single query."""
        votes_by_item: dict[UUID, list[Vote]] = defaultdict(list)
        if votable_ids:
            stmt = (
                select(votes_table)
                .where(
                    and_(
                        votes_table.c.votable_type == votable_type.value,
                        votes_table.c.votable_id.in_(list(votable_ids)),
                    )
                )
                .order_by(votes_table.c.created_at)
            )
            result = await self.session.execute(stmt)
            for row in result.fetchall():
                vote = row_to_vote(row._asdict())
                votes_by_item[vote.votable_id].append(vote)

        return {
            vid: VoteLedger(
                votable_type=votable_type,
                votable_id=vid,
                votes=tuple(votes_by_item.get(vid, [])),
            )
            for vid in votable_ids
        }

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        The flush surfaces the unique_vote constraint immediately as
        IntegrityError when the same voter raced us.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items."""
        if not votable_ids:
            return 0
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(list(votable_ids)),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
