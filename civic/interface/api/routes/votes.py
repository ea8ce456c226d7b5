"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from civic.application.usecase.vote import (
    CastVoteCommand,
    CastVoteRequest,
    CastVoteUseCase,
    GetVoteAggregateRequest,
    GetVoteAggregateUseCase,
    VoteAggregateResponse,
)
from civic.domain.service import JWTService
from civic.interface.api.identity import require_identity, resolve_identity

router = APIRouter(prefix="/api/vote", tags=["votes"], route_class=DishkaRoute)


@router.post("", response_model=VoteAggregateResponse)
async def cast_vote(
    body: CastVoteRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> VoteAggregateResponse:
    """Upvote or downvote a target.

    Requires authentication. Repeating the same vote changes nothing;
    voting the other way flips the stance.

    Args:
        body: Target and vote type
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Updated vote counts of the target
    """
    identity = require_identity(jwt_service, "vote", authorization, auth_token)
    command = CastVoteCommand(
        user_id=identity.user_id,
        target_type=body.target_type,
        target_id=body.target_id,
        vote_type=body.vote_type,
    )
    return await cast_vote_use_case.execute(command)


@router.get("/{target_type}/{target_id}", response_model=VoteAggregateResponse)
async def get_vote_aggregate(
    target_type: str,
    target_id: str,
    get_aggregate_use_case: FromDishka[GetVoteAggregateUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> VoteAggregateResponse:
    """Get vote counts of a target.

    Public endpoint; authenticated callers also get their own vote.
    """
    identity = resolve_identity(jwt_service, authorization, auth_token)
    request = GetVoteAggregateRequest(
        target_type=target_type,
        target_id=target_id,
        user_id=identity.user_id if identity else None,
    )
    return await get_aggregate_use_case.execute(request)
