"""Get vote aggregate use case."""

from typing import Optional

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.application.usecase.vote.cast_vote import VoteAggregateResponse
from civic.domain.service import VoteService
from civic.domain.value import TargetRef, UserId


class GetVoteAggregateRequest(ApiModel):
    """Get vote aggregate request."""

    target_type: str
    target_id: int | str
    user_id: Optional[str] = None  # None for anonymous readers


class GetVoteAggregateUseCase(BaseUseCase):
    """Use case for reading the vote counts of a target."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteAggregateRequest) -> VoteAggregateResponse:
        """Execute get aggregate flow.

        Raises:
            InvalidTargetError: If the target reference is malformed
        """
        target = TargetRef.parse(request.target_type, request.target_id)
        user_id = UserId(request.user_id) if request.user_id else None
        aggregate = await self.vote_service.get_aggregate(target, user_id)
        return VoteAggregateResponse.from_aggregate(target, aggregate)
