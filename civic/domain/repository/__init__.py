"""Repository interfaces for the CivicOS domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from civic.domain.repository.comment import CommentRepository
from civic.domain.repository.comment_edit import CommentEditRepository
from civic.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "CommentEditRepository",
    "VoteRepository",
]
