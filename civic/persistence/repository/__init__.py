"""PostgreSQL repository implementations."""

from civic.persistence.repository.comment import PostgresCommentRepository
from civic.persistence.repository.comment_edit import PostgresCommentEditRepository
from civic.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresCommentEditRepository",
    "PostgresVoteRepository",
]
