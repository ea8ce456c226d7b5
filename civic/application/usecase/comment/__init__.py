"""Comment use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .edit_comment import EditCommentCommand, EditCommentRequest, EditCommentUseCase
from .get_edit_history import (
    EditHistoryItem,
    GetEditHistoryRequest,
    GetEditHistoryUseCase,
)
from .list_comments import (
    CommentNode,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .post_comment import (
    CommentResponse,
    PostCommentCommand,
    PostCommentRequest,
    PostCommentUseCase,
)

__all__ = [
    "CommentNode",
    "CommentResponse",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "EditCommentCommand",
    "EditCommentRequest",
    "EditCommentUseCase",
    "EditHistoryItem",
    "GetEditHistoryRequest",
    "GetEditHistoryUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "PostCommentCommand",
    "PostCommentRequest",
    "PostCommentUseCase",
]
