"""Comment entity.

Comments are threaded discussions attached to any target entity
(politician, bill, petition, ...). Replies reference their parent through
``parent_id``; the tree is assembled on read.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from civic.domain.model.common import DomainModel
from civic.domain.value import CommentId, TargetRef, TargetType, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a target or a reply to another comment.

    Edit tracking:
    - edit_count: number of content-changing edits (one history row each)
    - is_edited / last_edited_at: set by the first and latest edit

    Deletion is soft: deleted_at marks the row, content and history are kept.
    """

    id: Optional[CommentId] = None  # Assigned by the database on insert
    target_type: TargetType
    target_id: int = Field(gt=0)
    author_id: UserId
    content: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    is_edited: bool = False
    edit_count: int = Field(default=0, ge=0)
    last_edited_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None

    @property
    def target(self) -> TargetRef:
        return TargetRef(target_type=self.target_type, target_id=self.target_id)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
