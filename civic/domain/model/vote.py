"""Vote entity.

A vote is one user's stance (up or down) on one target entity.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from civic.domain.model.common import DomainModel
from civic.domain.value import TargetRef, TargetType, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (enforced by database unique constraint)
    - Changing stance updates the existing row instead of inserting a new one
    - Votes are never hard-deleted; absence of a row means "no vote"
    """

    id: Optional[VoteId] = None  # Assigned by the database on insert
    user_id: UserId = Field(min_length=1)
    target_type: TargetType
    target_id: int = Field(gt=0)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def target(self) -> TargetRef:
        return TargetRef(target_type=self.target_type, target_id=self.target_id)
