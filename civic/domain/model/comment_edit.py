"""Comment edit history entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from civic.domain.model.common import DomainModel
from civic.domain.value import CommentEditId, CommentId


class CommentEdit(DomainModel):
    """One edit event on a comment.

    Stores the content as it was *before* the edit. For a given comment the
    edit numbers run 1..edit_count without gaps (unique per comment).
    """

    id: Optional[CommentEditId] = None  # Assigned by the database on insert
    comment_id: CommentId
    edit_number: int = Field(ge=1)
    original_content: str
    edited_at: datetime = Field(default_factory=datetime.now)
