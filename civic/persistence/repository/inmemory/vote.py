"""In-memory vote repository for testing."""

from datetime import datetime
from itertools import count
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from civic.domain.error import NotFoundError
from civic.domain.model.vote import Vote
from civic.domain.repository.vote import VoteRepository
from civic.domain.value import TargetRef, TargetType, UserId, VoteId, VoteTally, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}
        self._ids = count(1)

    async def find_by_user_and_target(
        self, user_id: UserId, target: TargetRef
    ) -> Optional[Vote]:
        """Find a user's vote on a target."""
        for vote in self._votes.values():
            if vote.user_id == user_id and vote.target == target:
                return vote
        return None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[int],
    ) -> list[Vote]:
        """Find a user's votes on multiple targets (batch query)."""
        wanted = set(target_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.target_type == target_type
            and v.target_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already voted on the target
        """
        if await self.find_by_user_and_target(vote.user_id, vote.target):
            raise IntegrityError("Duplicate vote", None, Exception())

        saved = vote.model_copy(update={"id": VoteId(next(self._ids))})
        self._votes[saved.id] = saved  # type: ignore[index]
        return saved

    async def update_vote_type(
        self, user_id: UserId, target: TargetRef, vote_type: VoteType
    ) -> Vote:
        """Flip the stance of an existing vote."""
        vote = await self.find_by_user_and_target(user_id, target)
        if vote is None or vote.id is None:
            raise NotFoundError("Vote", f"{user_id} on {target}")

        updated = vote.model_copy(
            update={"vote_type": vote_type, "updated_at": datetime.now()}
        )
        self._votes[vote.id] = updated
        return updated

    async def tally(self, target: TargetRef) -> VoteTally:
        """Count up and down votes on a target."""
        votes = [v for v in self._votes.values() if v.target == target]
        return VoteTally(
            upvotes=sum(1 for v in votes if v.vote_type == VoteType.UPVOTE),
            downvotes=sum(1 for v in votes if v.vote_type == VoteType.DOWNVOTE),
        )

    async def tally_many(
        self, target_type: TargetType, target_ids: Sequence[int]
    ) -> dict[int, VoteTally]:
        """Count votes on many targets; targets without votes are omitted."""
        tallies: dict[int, VoteTally] = {}
        for target_id in set(target_ids):
            tally = await self.tally(
                TargetRef(target_type=target_type, target_id=target_id)
            )
            if tally.upvotes or tally.downvotes:
                tallies[target_id] = tally
        return tallies
