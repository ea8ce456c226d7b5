"""SQLAlchemy table definitions for CivicOS engagement data.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP

metadata = MetaData()

TARGET_TYPES = (
    "politician",
    "bill",
    "post",
    "comment",
    "petition",
    "news",
    "finance",
)

target_type_enum = postgresql.ENUM(*TARGET_TYPES, name="target_type", create_type=False)
vote_type_enum = postgresql.ENUM("upvote", "downvote", name="vote_type", create_type=False)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(255), nullable=False),  # From identity provider
    Column("target_type", target_type_enum, nullable=False),
    Column("target_id", Integer, nullable=False),  # Weak reference, no FK
    Column("vote_type", vote_type_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="uq_votes_user_target"),
    CheckConstraint("target_id > 0", name="votes_target_id_positive"),
)

# Aggregation scans all votes on one target
Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("target_type", target_type_enum, nullable=False),
    Column("target_id", Integer, nullable=False),
    Column("author_id", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "parent_id",
        Integer,
        ForeignKey("comments.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edit_count", Integer, nullable=False, server_default="0"),
    Column("last_edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_by", String(255), nullable=True),
    CheckConstraint("edit_count >= 0", name="edit_count_non_negative"),
    CheckConstraint("target_id > 0", name="comments_target_id_positive"),
)

Index(
    "idx_comments_target",
    comments_table.c.target_type,
    comments_table.c.target_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# COMMENT EDIT HISTORY TABLE (append-only)
# ============================================================================
comment_edit_history_table = Table(
    "comment_edit_history",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "comment_id",
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("edit_number", Integer, nullable=False),
    Column("original_content", Text, nullable=False),
    Column(
        "edited_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "edit_number", name="uq_comment_edit_number"),
    CheckConstraint("edit_number >= 1", name="edit_number_positive"),
)
