"""Cast vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from querynet.application.usecase.base import BaseUseCase, ResponseModel
from querynet.domain.service import VoteService
from querynet.domain.value import UserId, VotableType, VoteDirection


class CastVoteRequest(BaseModel):
    """Vote request for a question or an answer.

    ``direction`` is left as a plain string so an unknown value reaches the
    domain and is reported with its own message.
    """

    votable_type: VotableType
    votable_id: UUID
    direction: Optional[str] = None
    user_id: str  # User ID from authenticated user


class CastVoteResponse(ResponseModel):
    """Score after the vote and the caller's resulting vote."""

    vote_score: int
    user_vote: Optional[VoteDirection] = None


class CastVoteUseCase(BaseUseCase):
    """Use case for casting, flipping or retracting a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute vote flow.

        Raises:
            ValidationError: If the direction is missing or unknown
            NotFoundError: If the item doesn't exist
            ConflictError: If a concurrent vote by the same user won
        """
        result = await self.vote_service.apply_vote(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            voter_id=UserId(UUID(request.user_id)),
            direction=request.direction or "",
        )
        return CastVoteResponse(vote_score=result.vote_score, user_vote=result.user_vote)
