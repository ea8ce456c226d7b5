"""Delete comment use case."""

from pydantic import Field

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.domain.service import CommentService
from civic.domain.value import CommentId, UserId


class DeleteCommentRequest(ApiModel):
    """Delete comment request."""

    comment_id: int
    requester_id: str = Field(min_length=1)
    can_moderate: bool = False  # Caller holds the moderate_comments capability


class DeleteCommentResponse(ApiModel):
    """Delete comment response."""

    comment_id: int
    is_deleted: bool


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If comment doesn't exist
            NotAuthorizedError: If requester is neither author nor moderator
        """
        comment = await self.comment_service.delete_comment(
            requester_id=UserId(request.requester_id),
            comment_id=CommentId(request.comment_id),
            can_moderate=request.can_moderate,
        )
        return DeleteCommentResponse(
            comment_id=request.comment_id, is_deleted=comment.is_deleted
        )
