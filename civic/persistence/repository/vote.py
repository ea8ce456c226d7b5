"""PostgreSQL implementation of Vote repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from civic.domain.error import NotFoundError
from civic.domain.model import Vote
from civic.domain.repository import VoteRepository
from civic.domain.value import TargetRef, TargetType, UserId, VoteTally, VoteType
from civic.persistence.mappers import row_to_vote, vote_to_dict
from civic.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_target(
        self, user_id: UserId, target: TargetRef
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_type == target.target_type.value,
                votes_table.c.target_id == target.target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a user's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        The insert runs in a savepoint so a unique violation leaves the
        surrounding transaction usable for the caller's retry.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote)).returning(votes_table)
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.one()
        return row_to_vote(row._asdict())

    async def update_vote_type(
        self, user_id: UserId, target: TargetRef, vote_type: VoteType
    ) -> Vote:
        """Flip the stance of an existing vote."""
        stmt = (
            update(votes_table)
            .where(
                and_(
                    votes_table.c.user_id == user_id,
                    votes_table.c.target_type == target.target_type.value,
                    votes_table.c.target_id == target.target_id,
                )
            )
            .values(vote_type=vote_type.value, updated_at=func.now())
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise NotFoundError("Vote", f"{user_id} on {target}")
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def tally(self, target: TargetRef) -> VoteTally:
        """Count up and down votes on one target."""
        stmt = (
            select(votes_table.c.vote_type, func.count().label("count"))
            .where(
                and_(
                    votes_table.c.target_type == target.target_type.value,
                    votes_table.c.target_id == target.target_id,
                )
            )
            .group_by(votes_table.c.vote_type)
        )
        result = await self.session.execute(stmt)
        counts = {row.vote_type: row.count for row in result.fetchall()}
        return VoteTally(
            upvotes=counts.get(VoteType.UPVOTE.value, 0),
            downvotes=counts.get(VoteType.DOWNVOTE.value, 0),
        )

    async def tally_many(
        self, target_type: TargetType, target_ids: Sequence[int]
    ) -> Dict[int, VoteTally]:
        """Count up and down votes on many targets in one query."""
        if not target_ids:
            return {}

        stmt = (
            select(
                votes_table.c.target_id,
                votes_table.c.vote_type,
                func.count().label("count"),
            )
            .where(
                and_(
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id.in_(target_ids),
                )
            )
            .group_by(votes_table.c.target_id, votes_table.c.vote_type)
        )
        result = await self.session.execute(stmt)

        counts: Dict[int, Dict[str, int]] = {}
        for row in result.fetchall():
            counts.setdefault(row.target_id, {})[row.vote_type] = row.count

        return {
            target_id: VoteTally(
                upvotes=by_type.get(VoteType.UPVOTE.value, 0),
                downvotes=by_type.get(VoteType.DOWNVOTE.value, 0),
            )
            for target_id, by_type in counts.items()
        }
