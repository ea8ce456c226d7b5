"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from civic.domain.model import Comment
from civic.domain.repository import CommentRepository
from civic.domain.value import CommentId, TargetRef, UserId
from civic.persistence.mappers import comment_to_dict, row_to_comment
from civic.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _target_clause(self, target: TargetRef):
        return and_(
            comments_table.c.target_type == target.target_type.value,
            comments_table.c.target_id == target.target_id,
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_target(
        self,
        target: TargetRef,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find all comments on a target, oldest first."""
        stmt = select(comments_table).where(self._target_clause(target))
        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted_at.is_(None))
        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment and return it with its generated ID."""
        stmt = (
            insert(comments_table)
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def apply_edit(
        self, comment_id: CommentId, content: str, edited_at: datetime
    ) -> Optional[Comment]:
        """Replace content of a live comment and bump its edit counter."""
        stmt = (
            update(comments_table)
            .where(
                and_(
                    comments_table.c.id == comment_id,
                    comments_table.c.deleted_at.is_(None),
                )
            )
            .values(
                content=content,
                is_edited=True,
                edit_count=comments_table.c.edit_count + 1,
                last_edited_at=edited_at,
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted."""
        stmt = (
            update(comments_table)
            .where(
                and_(
                    comments_table.c.id == comment_id,
                    comments_table.c.deleted_at.is_(None),
                )
            )
            .values(deleted_at=deleted_at, deleted_by=deleted_by)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def count_by_target(self, target: TargetRef) -> int:
        """Count live comments on a target."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(
                and_(
                    self._target_clause(target),
                    comments_table.c.deleted_at.is_(None),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
