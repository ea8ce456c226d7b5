"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from civic.domain.model.comment import Comment
from civic.domain.value import CommentId, TargetRef, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, deleted or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_target(
        self,
        target: TargetRef,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find all comments on a target, oldest first.

        Ordered by created_at then id, so callers can build the reply tree
        in a single pass.

        Args:
            target: The commented target
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Comments on the target
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save (id is ignored and assigned on insert)

        Returns:
            The saved comment with its ID
        """
        pass

    @abstractmethod
    async def apply_edit(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a live comment and bump its edit counter.

        Sets is_edited, increments edit_count by one at the SQL level and
        records last_edited_at.

        Args:
            comment_id: Comment ID
            content: New content
            edited_at: Edit timestamp

        Returns:
            Updated comment, or None if missing or deleted
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted.

        Args:
            comment_id: Comment ID
            deleted_by: User performing the deletion
            deleted_at: Deletion timestamp

        Returns:
            Deleted comment, or None if missing or already deleted
        """
        pass

    @abstractmethod
    async def count_by_target(self, target: TargetRef) -> int:
        """Count live comments on a target.

        Args:
            target: The commented target

        Returns:
            Number of comments
        """
        pass
