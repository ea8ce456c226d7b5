"""Domain model entities for CivicOS."""

from civic.domain.model.comment import Comment
from civic.domain.model.comment_edit import CommentEdit
from civic.domain.model.vote import Vote

__all__ = [
    "Comment",
    "CommentEdit",
    "Vote",
]
