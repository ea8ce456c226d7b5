"""Comment domain service."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy.exc import IntegrityError

from civic.config import CommentSettings
from civic.domain.error import (
    DatabaseError,
    EmptyContentError,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from civic.domain.model import Comment, CommentEdit
from civic.domain.repository import CommentEditRepository, CommentRepository
from civic.domain.value import CommentId, TargetRef, UserId

from .base import Service


@dataclass
class CommentTreeNode:
    """Node in a comment thread.

    A deleted comment only appears in the tree when some reply below it is
    still live; it then stands in as a placeholder for its replies.
    """

    comment: Comment
    replies: list["CommentTreeNode"] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return self.comment.is_deleted


@dataclass
class EditHistory:
    """A live comment together with its edit events (newest first)."""

    comment: Comment
    edits: list[CommentEdit]


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_edit_repository: CommentEditRepository,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_edit_repository: Edit history repository
            comment_settings: Comment rules (length limit, deleted placeholder)
        """
        self.comment_repository = comment_repository
        self.comment_edit_repository = comment_edit_repository
        self.comment_settings = comment_settings

    async def post_comment(
        self,
        author_id: UserId,
        target: TargetRef,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a target or a reply to another comment.

        Args:
            author_id: Author user ID
            target: Commented target
            content: Comment text (trimmed before storing)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            EmptyContentError: If content is blank
            ValidationError: If content is too long
            InvalidParentError: If parent is missing, deleted, on another target
                or already at the maximum reply depth
        """
        with logfire.span(
            "comment_service.post_comment",
            author_id=author_id,
            target=str(target),
            parent_id=parent_id,
        ):
            text = self._clean_content(content)

            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn("Parent comment not found", parent_id=parent_id)
                    raise InvalidParentError(parent_id, "not found")
                if parent.is_deleted:
                    logfire.warn("Reply to deleted comment", parent_id=parent_id)
                    raise InvalidParentError(parent_id, "has been deleted")
                if parent.target != target:
                    logfire.warn(
                        "Parent comment does not belong to target",
                        parent_id=parent_id,
                        parent_target=str(parent.target),
                        target=str(target),
                    )
                    raise InvalidParentError(
                        parent_id, f"does not belong to {target}"
                    )
                max_depth = self.comment_settings.max_depth
                if await self._depth_of(parent) >= max_depth:
                    logfire.warn(
                        "Reply nested too deep",
                        parent_id=parent_id,
                        max_depth=max_depth,
                    )
                    raise InvalidParentError(
                        parent_id, f"replies are limited to {max_depth} levels"
                    )

            comment = Comment(
                target_type=target.target_type,
                target_id=target.target_id,
                author_id=author_id,
                content=text,
                parent_id=parent_id,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                target=str(target),
                author_id=author_id,
                is_reply=parent_id is not None,
            )
            return saved

    async def edit_comment(
        self, requester_id: UserId, comment_id: CommentId, new_content: str
    ) -> Comment:
        """Replace a comment's content, keeping the previous version in history.

        The history row and the comment update are written in the same
        transaction. Submitting the current content again is a no-op.

        Args:
            requester_id: User requesting the edit (must be the author)
            comment_id: Comment ID
            new_content: New text

        Returns:
            Updated comment

        Raises:
            NotFoundError: If comment is missing or deleted
            NotAuthorizedError: If requester is not the author
            EmptyContentError: If new content is blank
            DatabaseError: If a concurrent edit took the same edit number
        """
        with logfire.span(
            "comment_service.edit_comment",
            comment_id=comment_id,
            requester_id=requester_id,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.is_deleted:
                logfire.warn("Edit of missing comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != requester_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=comment_id,
                    requester_id=requester_id,
                )
                raise NotAuthorizedError(
                    "edit", "comment", str(comment_id), requester_id
                )

            text = self._clean_content(new_content)
            if text == comment.content:
                logfire.info("Comment content unchanged", comment_id=comment_id)
                return comment

            now = datetime.now()
            updated = await self.comment_repository.apply_edit(comment_id, text, now)
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Comment", str(comment_id))

            # The history row takes the number the counter just reached
            try:
                await self.comment_edit_repository.save(
                    CommentEdit(
                        comment_id=comment_id,
                        edit_number=updated.edit_count,
                        original_content=comment.content,
                        edited_at=now,
                    )
                )
            except IntegrityError as e:
                logfire.error(
                    "Concurrent comment edit", comment_id=comment_id, error=str(e)
                )
                raise DatabaseError(
                    f"Failed to record edit of comment {comment_id}"
                ) from e

            logfire.info(
                "Comment edited",
                comment_id=comment_id,
                edit_count=updated.edit_count,
                content_length=len(text),
            )
            return updated

    async def delete_comment(
        self,
        requester_id: UserId,
        comment_id: CommentId,
        can_moderate: bool = False,
    ) -> Comment:
        """Soft-delete a comment.

        Replies stay in place; listings show a placeholder for the deleted
        parent. Deleting an already deleted comment succeeds without changes.

        Args:
            requester_id: User requesting the deletion
            comment_id: Comment ID
            can_moderate: Whether the requester may delete any comment

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If comment does not exist
            NotAuthorizedError: If requester is neither author nor moderator
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=comment_id,
            requester_id=requester_id,
            can_moderate=can_moderate,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Delete of missing comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != requester_id and not can_moderate:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=comment_id,
                    requester_id=requester_id,
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), requester_id
                )

            if comment.is_deleted:
                logfire.info("Comment already deleted", comment_id=comment_id)
                return comment

            deleted = await self.comment_repository.soft_delete(
                comment_id, requester_id, datetime.now()
            )
            if deleted is None:
                # Lost a race with another delete; the end state is the same
                return await self.comment_repository.find_by_id(comment_id) or comment

            logfire.info(
                "Comment deleted",
                comment_id=comment_id,
                by_moderator=comment.author_id != requester_id,
            )
            return deleted

    async def get_edit_history(self, comment_id: CommentId) -> EditHistory:
        """Get a comment's edit history.

        History shares the visibility of its comment: deleted comments have none.

        Args:
            comment_id: Comment ID

        Returns:
            Live comment plus its edits, newest first

        Raises:
            NotFoundError: If comment is missing or deleted
        """
        with logfire.span("comment_service.get_edit_history", comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.is_deleted:
                logfire.warn("History of missing comment", comment_id=comment_id)
                raise NotFoundError("Comment", str(comment_id))

            edits = await self.comment_edit_repository.find_by_comment(comment_id)
            return EditHistory(comment=comment, edits=edits)

    async def list_comments(self, target: TargetRef) -> list[CommentTreeNode]:
        """Get the comment thread of a target.

        Top-level comments and replies are both ordered oldest first.

        Args:
            target: Commented target

        Returns:
            Top-level nodes, each carrying its nested replies
        """
        with logfire.span("comment_service.list_comments", target=str(target)):
            comments = await self.comment_repository.find_by_target(
                target, include_deleted=True
            )

            known_ids = {comment.id for comment in comments}
            children: dict[Optional[CommentId], list[Comment]] = defaultdict(list)
            for comment in comments:
                # Orphans (parent row gone) are shown at the top level
                parent = comment.parent_id if comment.parent_id in known_ids else None
                children[parent].append(comment)

            # Post-order walk: a node is built after all of its replies
            built: dict[Optional[CommentId], CommentTreeNode | None] = {}
            stack = [(comment, False) for comment in children[None]]
            while stack:
                comment, expanded = stack.pop()
                if not expanded:
                    stack.append((comment, True))
                    stack.extend((child, False) for child in children[comment.id])
                    continue
                replies = [
                    node
                    for node in (built[child.id] for child in children[comment.id])
                    if node is not None
                ]
                if comment.is_deleted and not replies:
                    built[comment.id] = None
                else:
                    built[comment.id] = CommentTreeNode(
                        comment=comment, replies=replies
                    )

            roots = [
                node
                for node in (built[comment.id] for comment in children[None])
                if node is not None
            ]

            logfire.info(
                "Comments retrieved for target",
                target=str(target),
                count=len(comments),
                top_level=len(roots),
            )
            return roots

    async def count_comments(self, target: TargetRef) -> int:
        """Count live comments on a target."""
        return await self.comment_repository.count_by_target(target)

    async def _depth_of(self, comment: Comment) -> int:
        """Reply depth of a comment, counted up to the configured maximum."""
        depth = 0
        current = comment
        while (
            current.parent_id is not None
            and depth < self.comment_settings.max_depth
        ):
            parent = await self.comment_repository.find_by_id(current.parent_id)
            if parent is None:
                break
            current = parent
            depth += 1
        return depth

    def visible_content(self, comment: Comment) -> str:
        """Content shown to readers: the placeholder for deleted comments."""
        if comment.is_deleted:
            return self.comment_settings.deleted_placeholder
        return comment.content

    def _clean_content(self, content: str) -> str:
        text = content.strip()
        if not text:
            raise EmptyContentError()
        if len(text) > self.comment_settings.max_length:
            raise ValidationError(
                f"Comment must be at most {self.comment_settings.max_length} characters"
            )
        return text
