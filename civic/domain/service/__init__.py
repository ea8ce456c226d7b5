"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentTreeNode, EditHistory
from .jwt_service import JWTService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "CommentTreeNode",
    "EditHistory",
    "JWTService",
    "Service",
    "VoteService",
]
