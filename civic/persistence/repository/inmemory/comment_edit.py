"""In-memory comment edit history repository for testing."""

from itertools import count

from sqlalchemy.exc import IntegrityError

from civic.domain.model.comment_edit import CommentEdit
from civic.domain.repository.comment_edit import CommentEditRepository
from civic.domain.value import CommentEditId, CommentId


class InMemoryCommentEditRepository(CommentEditRepository):
    """In-memory implementation of CommentEditRepository for testing."""

    def __init__(self) -> None:
        self._edits: list[CommentEdit] = []
        self._ids = count(1)

    async def save(self, edit: CommentEdit) -> CommentEdit:
        """Append an edit event.

        Raises:
            IntegrityError: If the edit number is already taken for the comment
        """
        for existing in self._edits:
            if (
                existing.comment_id == edit.comment_id
                and existing.edit_number == edit.edit_number
            ):
                raise IntegrityError("Duplicate edit number", None, Exception())

        saved = edit.model_copy(update={"id": CommentEditId(next(self._ids))})
        self._edits.append(saved)
        return saved

    async def find_by_comment(self, comment_id: CommentId) -> list[CommentEdit]:
        """Get a comment's edit events, newest first."""
        edits = [e for e in self._edits if e.comment_id == comment_id]
        edits.sort(key=lambda e: e.edit_number, reverse=True)
        return edits
