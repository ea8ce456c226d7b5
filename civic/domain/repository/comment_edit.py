"""Comment edit history repository interface."""

from abc import ABC, abstractmethod
from typing import List

from civic.domain.model.comment_edit import CommentEdit
from civic.domain.value import CommentId


class CommentEditRepository(ABC):
    """Append-only store of comment edit events."""

    @abstractmethod
    async def save(self, edit: CommentEdit) -> CommentEdit:
        """Append an edit event.

        Args:
            edit: The edit to record

        Returns:
            The saved edit with its ID

        Raises:
            IntegrityError: If the edit number is already taken for this comment
        """
        pass

    @abstractmethod
    async def find_by_comment(self, comment_id: CommentId) -> List[CommentEdit]:
        """Find all edits of a comment, newest first.

        Args:
            comment_id: Comment ID

        Returns:
            Edits ordered by edit_number descending
        """
        pass
