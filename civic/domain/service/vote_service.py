"""Vote domain service."""

from datetime import datetime
from typing import Sequence

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from civic.config import VoteSettings
from civic.domain.error import AlreadyVotedError, DatabaseError, ValidationError
from civic.domain.model.vote import Vote
from civic.domain.repository import VoteRepository
from civic.domain.value import (
    TargetRef,
    TargetType,
    UserId,
    VoteAggregate,
    VoteTally,
    VoteType,
)

from .base import Service


class VoteService(Service):
    """Domain service for vote operations.

    Enforces at most one vote per (user, target) and computes aggregates
    from the stored votes. Scores are never cached; every read counts rows.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        vote_settings: VoteSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            vote_settings: Voting rules (stance change policy)
        """
        self.vote_repository = vote_repository
        self.vote_settings = vote_settings

    async def cast_vote(
        self, user_id: UserId, target: TargetRef, vote_type: VoteType
    ) -> VoteAggregate:
        """Record a user's stance on a target.

        - No previous vote: a new vote is inserted
        - Same stance as before: nothing changes
        - Different stance: the existing vote is flipped in place, unless
          stance changes are disabled

        An insert that loses a race against a concurrent insert for the same
        (user, target) is retried once as an update.

        Args:
            user_id: Voting user
            target: Voted target
            vote_type: Upvote or downvote

        Returns:
            Fresh aggregate for the target, including the user's vote

        Raises:
            ValidationError: If user_id is empty
            AlreadyVotedError: If stance changes are disabled and the user already voted differently
            DatabaseError: If the write fails after the retry
        """
        with logfire.span(
            "vote_service.cast_vote",
            user_id=user_id,
            target=str(target),
            vote_type=vote_type.value,
        ):
            if not user_id:
                raise ValidationError("User ID is required to vote")

            existing = await self.vote_repository.find_by_user_and_target(
                user_id, target
            )

            if existing is None:
                now = datetime.now()
                vote = Vote(
                    user_id=user_id,
                    target_type=target.target_type,
                    target_id=target.target_id,
                    vote_type=vote_type,
                    created_at=now,
                    updated_at=now,
                )
                try:
                    saved = await self.vote_repository.save(vote)
                    logfire.info(
                        "Vote created",
                        vote_id=saved.id,
                        user_id=user_id,
                        target=str(target),
                        vote_type=vote_type.value,
                    )
                except IntegrityError:
                    logfire.warn(
                        "Concurrent vote insert, retrying as update",
                        user_id=user_id,
                        target=str(target),
                    )
                    await self._retry_as_update(user_id, target, vote_type)
            else:
                await self._change_stance(existing, vote_type)

            return await self.get_aggregate(target, user_id)

    async def get_aggregate(
        self, target: TargetRef, user_id: UserId | None = None
    ) -> VoteAggregate:
        """Compute the vote aggregate of a target.

        Args:
            target: Voted target
            user_id: Requesting user, if authenticated

        Returns:
            Up/down counts, score and the user's own vote (None when anonymous)
        """
        with logfire.span(
            "vote_service.get_aggregate", target=str(target), user_id=user_id
        ):
            tally = await self.vote_repository.tally(target)

            user_vote = None
            if user_id:
                own = await self.vote_repository.find_by_user_and_target(
                    user_id, target
                )
                user_vote = own.vote_type if own else None

            return VoteAggregate.from_tally(tally, user_vote)

    async def get_aggregates(
        self,
        target_type: TargetType,
        target_ids: Sequence[int],
        user_id: UserId | None = None,
    ) -> dict[int, VoteAggregate]:
        """Compute aggregates for many targets of one type.

        Args:
            target_type: Type shared by all targets
            target_ids: Target IDs
            user_id: Requesting user, if authenticated

        Returns:
            Mapping of every requested target ID to its aggregate
        """
        if not target_ids:
            return {}

        # Batch queries to avoid N+1 when listing comment threads
        tallies = await self.vote_repository.tally_many(target_type, target_ids)

        own_votes: dict[int, VoteType] = {}
        if user_id:
            votes = await self.vote_repository.find_by_user_and_targets(
                user_id=user_id,
                target_type=target_type,
                target_ids=target_ids,
            )
            own_votes = {vote.target_id: vote.vote_type for vote in votes}

        return {
            target_id: VoteAggregate.from_tally(
                tallies.get(target_id, VoteTally()), own_votes.get(target_id)
            )
            for target_id in target_ids
        }

    async def _change_stance(self, existing: Vote, vote_type: VoteType) -> None:
        """Apply a repeated vote to an existing row."""
        if existing.vote_type == vote_type:
            logfire.info(
                "Vote unchanged",
                vote_id=existing.id,
                user_id=existing.user_id,
                vote_type=vote_type.value,
            )
            return

        if not self.vote_settings.allow_stance_change:
            logfire.warn(
                "Stance change rejected",
                vote_id=existing.id,
                user_id=existing.user_id,
                target=str(existing.target),
            )
            raise AlreadyVotedError(existing.user_id, str(existing.target))

        await self.vote_repository.update_vote_type(
            existing.user_id, existing.target, vote_type
        )
        logfire.info(
            "Vote stance changed",
            vote_id=existing.id,
            user_id=existing.user_id,
            previous=existing.vote_type.value,
            vote_type=vote_type.value,
        )

    async def _retry_as_update(
        self, user_id: UserId, target: TargetRef, vote_type: VoteType
    ) -> None:
        """Second attempt after a unique constraint violation on insert."""
        try:
            winner = await self.vote_repository.find_by_user_and_target(
                user_id, target
            )
            if winner is None:
                raise DatabaseError(
                    f"Vote insert for {target} conflicted but no vote was found"
                )
            await self._change_stance(winner, vote_type)
        except SQLAlchemyError as e:
            logfire.error(
                "Vote retry failed",
                user_id=user_id,
                target=str(target),
                error=str(e),
            )
            raise DatabaseError(f"Failed to record vote on {target}") from e
