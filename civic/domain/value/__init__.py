"""Domain value objects for CivicOS."""

from civic.domain.value.identifiers import (
    MAX_ID,
    CommentEditId,
    CommentId,
    UserId,
    VoteId,
)
from civic.domain.value.types import (
    Capability,
    TargetRef,
    TargetType,
    VoteAggregate,
    VoteTally,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "VoteId",
    "CommentId",
    "CommentEditId",
    "MAX_ID",
    # Types
    "Capability",
    "TargetRef",
    "TargetType",
    "VoteAggregate",
    "VoteTally",
    "VoteType",
]
