"""Cast vote use case."""

from typing import Optional

from pydantic import Field

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.domain.service import VoteService
from civic.domain.value import TargetRef, UserId, VoteAggregate, VoteType


class VoteAggregateResponse(ApiModel):
    """Vote counts of a target as seen by the requesting user."""

    target_type: str
    target_id: int
    upvotes: int
    downvotes: int
    total_score: int
    user_vote: Optional[VoteType] = None

    @classmethod
    def from_aggregate(
        cls, target: TargetRef, aggregate: VoteAggregate
    ) -> "VoteAggregateResponse":
        return cls(
            target_type=target.target_type.value,
            target_id=target.target_id,
            upvotes=aggregate.upvotes,
            downvotes=aggregate.downvotes,
            total_score=aggregate.total_score,
            user_vote=aggregate.user_vote,
        )


class CastVoteRequest(ApiModel):
    """Cast vote request body."""

    target_type: str
    target_id: int | str
    vote_type: VoteType


class CastVoteCommand(ApiModel):
    """Cast vote request enriched with the caller's identity."""

    user_id: str = Field(min_length=1)
    target_type: str
    target_id: int | str
    vote_type: VoteType


class CastVoteUseCase(BaseUseCase):
    """Use case for voting on any target."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteCommand) -> VoteAggregateResponse:
        """Execute cast vote flow.

        Args:
            request: Vote with authenticated user ID

        Returns:
            Updated aggregate for the target

        Raises:
            InvalidTargetError: If the target reference is malformed
            AlreadyVotedError: If stance changes are disabled
        """
        target = TargetRef.parse(request.target_type, request.target_id)
        aggregate = await self.vote_service.cast_vote(
            UserId(request.user_id), target, request.vote_type
        )
        return VoteAggregateResponse.from_aggregate(target, aggregate)
