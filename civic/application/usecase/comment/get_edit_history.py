"""Get comment edit history use case."""

from datetime import datetime
from typing import Optional

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.domain.service import CommentService
from civic.domain.value import CommentId


class EditHistoryItem(ApiModel):
    """One version of a comment.

    The current version has no edit number; each stored edit carries the
    content as it was before that edit.
    """

    edit_number: Optional[int] = None
    content: str
    edited_at: datetime
    is_current: bool = False


class GetEditHistoryRequest(ApiModel):
    """Get edit history request."""

    comment_id: int


class GetEditHistoryUseCase(BaseUseCase):
    """Use case for reading the versions of a comment, newest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetEditHistoryRequest) -> list[EditHistoryItem]:
        """Execute get edit history flow.

        Returns:
            Current version followed by stored edits (newest first)

        Raises:
            NotFoundError: If comment doesn't exist or was deleted
        """
        history = await self.comment_service.get_edit_history(
            CommentId(request.comment_id)
        )
        comment = history.comment

        items = [
            EditHistoryItem(
                content=comment.content,
                edited_at=comment.last_edited_at or comment.created_at,
                is_current=True,
            )
        ]
        items.extend(
            EditHistoryItem(
                edit_number=edit.edit_number,
                content=edit.original_content,
                edited_at=edit.edited_at,
            )
            for edit in history.edits
        )
        return items
