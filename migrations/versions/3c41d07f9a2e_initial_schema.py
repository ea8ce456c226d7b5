"""initial_schema

Create the engagement schema for CivicOS:
- Votes (one upvote or downvote per user and target)
- Comments (threaded, soft-deleted, on any target type)
- Comment edit history (append-only, one row per content change)

Revision ID: 3c41d07f9a2e
Revises:
Create Date: 2026-10-18 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d07f9a2e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE target_type AS ENUM (
                'politician', 'bill', 'post', 'comment', 'petition', 'news', 'finance'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_type AS ENUM ('upvote', 'downvote');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    target_type = postgresql.ENUM(name="target_type", create_type=False)
    vote_type = postgresql.ENUM(name="vote_type", create_type=False)

    # ========================================================================
    # VOTES TABLE
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("target_type", target_type, nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("vote_type", vote_type, nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_votes_user_target"
        ),
        sa.CheckConstraint("target_id > 0", name="votes_target_id_positive"),
    )
    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # COMMENTS TABLE
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("target_type", target_type, nullable=False),
        sa.Column("target_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "parent_id",
            sa.Integer(),
            sa.ForeignKey("comments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("edit_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_edited_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(255), nullable=True),
        sa.CheckConstraint("edit_count >= 0", name="edit_count_non_negative"),
        sa.CheckConstraint("target_id > 0", name="comments_target_id_positive"),
    )
    op.create_index(
        "idx_comments_target", "comments", ["target_type", "target_id", "created_at"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # COMMENT EDIT HISTORY TABLE
    # ========================================================================
    op.create_table(
        "comment_edit_history",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "comment_id",
            sa.Integer(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("edit_number", sa.Integer(), nullable=False),
        sa.Column("original_content", sa.Text(), nullable=False),
        sa.Column(
            "edited_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint(
            "comment_id", "edit_number", name="uq_comment_edit_number"
        ),
        sa.CheckConstraint("edit_number >= 1", name="edit_number_positive"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comment_edit_history")
    op.drop_index("idx_comments_author_id", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_target", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_votes_target", table_name="votes")
    op.drop_table("votes")
    op.execute("DROP TYPE IF EXISTS vote_type")
    op.execute("DROP TYPE IF EXISTS target_type")
