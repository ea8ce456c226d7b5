"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. Enums are written as
their plain string values.
"""

from typing import Any, Dict

from civic.domain.model import Comment, CommentEdit, Vote
from civic.domain.value import (
    CommentEditId,
    CommentId,
    TargetType,
    UserId,
    VoteId,
    VoteType,
)


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(row["id"]),
        user_id=UserId(row["user_id"]),
        target_type=TargetType(row["target_type"]),
        target_id=row["target_id"],
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict (without the generated id)."""
    return {
        "user_id": vote.user_id,
        "target_type": vote.target_type.value,
        "target_id": vote.target_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        target_type=TargetType(row["target_type"]),
        target_id=row["target_id"],
        author_id=UserId(row["author_id"]),
        content=row["content"],
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        created_at=row["created_at"],
        is_edited=row["is_edited"],
        edit_count=row["edit_count"],
        last_edited_at=row.get("last_edited_at"),
        deleted_at=row.get("deleted_at"),
        deleted_by=UserId(row["deleted_by"]) if row.get("deleted_by") else None,
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict (without the generated id)."""
    return {
        "target_type": comment.target_type.value,
        "target_id": comment.target_id,
        "author_id": comment.author_id,
        "content": comment.content,
        "parent_id": comment.parent_id,
        "created_at": comment.created_at,
        "is_edited": comment.is_edited,
        "edit_count": comment.edit_count,
        "last_edited_at": comment.last_edited_at,
        "deleted_at": comment.deleted_at,
        "deleted_by": comment.deleted_by,
    }


def row_to_comment_edit(row: Dict[str, Any]) -> CommentEdit:
    """Convert database row to CommentEdit domain model."""
    return CommentEdit(
        id=CommentEditId(row["id"]),
        comment_id=CommentId(row["comment_id"]),
        edit_number=row["edit_number"],
        original_content=row["original_content"],
        edited_at=row["edited_at"],
    )


def comment_edit_to_dict(edit: CommentEdit) -> Dict[str, Any]:
    """Convert CommentEdit domain model to database dict (without the generated id)."""
    return edit.model_dump(exclude={"id"})
