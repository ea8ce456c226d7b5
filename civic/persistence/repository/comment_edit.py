"""PostgreSQL implementation of CommentEdit repository."""

from typing import List

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from civic.domain.model import CommentEdit
from civic.domain.repository import CommentEditRepository
from civic.domain.value import CommentId
from civic.persistence.mappers import comment_edit_to_dict, row_to_comment_edit
from civic.persistence.tables import comment_edit_history_table


class PostgresCommentEditRepository(CommentEditRepository):
    """PostgreSQL implementation of CommentEditRepository.

    Rows are append-only; there is no update or delete.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, edit: CommentEdit) -> CommentEdit:
        """Append an edit event."""
        stmt = (
            insert(comment_edit_history_table)
            .values(**comment_edit_to_dict(edit))
            .returning(comment_edit_history_table)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return row_to_comment_edit(row._asdict())

    async def find_by_comment(self, comment_id: CommentId) -> List[CommentEdit]:
        """Get a comment's edit events, newest first."""
        stmt = (
            select(comment_edit_history_table)
            .where(comment_edit_history_table.c.comment_id == comment_id)
            .order_by(comment_edit_history_table.c.edit_number.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_comment_edit(row._asdict()) for row in result.fetchall()]
