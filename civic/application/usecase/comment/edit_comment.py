"""Edit comment use case."""

from pydantic import Field

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.application.usecase.comment.post_comment import CommentResponse
from civic.domain.service import CommentService
from civic.domain.value import CommentId, UserId


class EditCommentRequest(ApiModel):
    """Edit comment request body."""

    content: str


class EditCommentCommand(ApiModel):
    """Edit comment request enriched with the requester's identity."""

    comment_id: int
    requester_id: str = Field(min_length=1)
    content: str


class EditCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentCommand) -> CommentResponse:
        """Execute edit comment flow.

        Args:
            request: New content and requester

        Returns:
            Updated comment

        Raises:
            NotFoundError: If comment doesn't exist or was deleted
            NotAuthorizedError: If requester is not the author
            EmptyContentError: If content is blank
        """
        comment = await self.comment_service.edit_comment(
            requester_id=UserId(request.requester_id),
            comment_id=CommentId(request.comment_id),
            new_content=request.content,
        )
        return CommentResponse.from_comment(comment)
