"""Vote use cases."""

from .cast_vote import (
    CastVoteCommand,
    CastVoteRequest,
    CastVoteUseCase,
    VoteAggregateResponse,
)
from .get_aggregate import GetVoteAggregateRequest, GetVoteAggregateUseCase

__all__ = [
    "CastVoteCommand",
    "CastVoteRequest",
    "CastVoteUseCase",
    "VoteAggregateResponse",
    "GetVoteAggregateRequest",
    "GetVoteAggregateUseCase",
]
