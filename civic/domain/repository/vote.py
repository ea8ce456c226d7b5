"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from civic.domain.model.vote import Vote
from civic.domain.value import TargetRef, TargetType, UserId, VoteTally, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self, user_id: UserId, target: TargetRef
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            user_id: The user's ID
            target: The voted target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a user's votes on multiple targets of one type (batch query).

        Args:
            user_id: The user's ID
            target_type: Type shared by all targets
            target_ids: Target IDs to check

        Returns:
            Votes by the user on the specified targets
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to save (id is ignored and assigned on insert)

        Returns:
            The saved vote with its ID

        Raises:
            IntegrityError: If the user already has a vote on this target
        """
        pass

    @abstractmethod
    async def update_vote_type(
        self, user_id: UserId, target: TargetRef, vote_type: VoteType
    ) -> Vote:
        """Change the stance of a user's existing vote in place.

        Args:
            user_id: The voter
            target: The voted target
            vote_type: New stance

        Returns:
            The updated vote

        Raises:
            NotFoundError: If the vote does not exist
        """
        pass

    @abstractmethod
    async def tally(self, target: TargetRef) -> VoteTally:
        """Count upvotes and downvotes on a target.

        Args:
            target: The voted target

        Returns:
            Up/down counts (zero when nobody voted)
        """
        pass

    @abstractmethod
    async def tally_many(
        self, target_type: TargetType, target_ids: Sequence[int]
    ) -> Dict[int, VoteTally]:
        """Count votes on several targets of one type in a single query.

        Args:
            target_type: Type shared by all targets
            target_ids: Target IDs to count

        Returns:
            Mapping of target ID to tally; targets without votes may be absent
        """
        pass
