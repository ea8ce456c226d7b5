"""In-memory comment repository for testing."""

from datetime import datetime
from itertools import count
from typing import Optional

from civic.domain.model.comment import Comment
from civic.domain.repository.comment import CommentRepository
from civic.domain.value import CommentId, TargetRef, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = count(1)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_target(
        self,
        target: TargetRef,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find all comments on a target, oldest first."""
        comments = [c for c in self._comments.values() if c.target == target]

        if not include_deleted:
            comments = [c for c in comments if c.deleted_at is None]

        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment, assigning the next ID."""
        saved = comment.model_copy(update={"id": CommentId(next(self._ids))})
        self._comments[saved.id] = saved  # type: ignore[index]
        return saved

    async def apply_edit(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace content of a live comment and bump its edit counter."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        updated = comment.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "edit_count": comment.edit_count + 1,
                "last_edited_at": edited_at,
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        deleted = comment.model_copy(
            update={"deleted_at": deleted_at, "deleted_by": deleted_by}
        )
        self._comments[comment_id] = deleted
        return deleted

    async def count_by_target(self, target: TargetRef) -> int:
        """Count live comments on a target."""
        return sum(
            1
            for c in self._comments.values()
            if c.target == target and not c.is_deleted
        )
