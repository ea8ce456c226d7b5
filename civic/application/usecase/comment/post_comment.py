"""Post comment use case."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.domain.model import Comment
from civic.domain.service import CommentService
from civic.domain.value import MAX_ID, CommentId, TargetRef, UserId


class CommentResponse(ApiModel):
    """Comment as returned by write endpoints."""

    id: int
    target_type: str
    target_id: int
    author_id: Optional[str]
    content: str
    parent_comment_id: Optional[int] = None
    created_at: datetime
    is_edited: bool
    edit_count: int
    last_edited_at: Optional[datetime] = None
    is_deleted: bool = False

    @classmethod
    def from_comment(cls, comment: Comment, **overrides) -> "CommentResponse":
        fields = dict(
            id=comment.id,
            target_type=comment.target_type.value,
            target_id=comment.target_id,
            author_id=comment.author_id,
            content=comment.content,
            parent_comment_id=comment.parent_id,
            created_at=comment.created_at,
            is_edited=comment.is_edited,
            edit_count=comment.edit_count,
            last_edited_at=comment.last_edited_at,
            is_deleted=comment.is_deleted,
        )
        fields.update(overrides)
        return cls(**fields)


class PostCommentRequest(ApiModel):
    """Post comment request body."""

    content: str
    parent_comment_id: Optional[int] = Field(default=None, gt=0, le=MAX_ID)


class PostCommentCommand(ApiModel):
    """Post comment request enriched with target and author."""

    author_id: str = Field(min_length=1)
    target_type: str
    target_id: int | str
    content: str
    parent_comment_id: Optional[int] = None


class PostCommentUseCase(BaseUseCase):
    """Use case for commenting on a target or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize post comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: PostCommentCommand) -> CommentResponse:
        """Execute post comment flow.

        Args:
            request: Comment content, target and author

        Returns:
            Created comment

        Raises:
            InvalidTargetError: If the target reference is malformed
            InvalidParentError: If the parent comment cannot be replied to
            EmptyContentError: If content is blank
        """
        target = TargetRef.parse(request.target_type, request.target_id)
        parent_id = (
            CommentId(request.parent_comment_id)
            if request.parent_comment_id is not None
            else None
        )

        comment = await self.comment_service.post_comment(
            author_id=UserId(request.author_id),
            target=target,
            content=request.content,
            parent_id=parent_id,
        )
        return CommentResponse.from_comment(comment)
