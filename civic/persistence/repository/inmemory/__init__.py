"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_edit import InMemoryCommentEditRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentEditRepository",
    "InMemoryVoteRepository",
]
