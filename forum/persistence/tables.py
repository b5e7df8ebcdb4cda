"""SQLAlchemy table definitions for the forum.

Tables are used through SQLAlchemy Core; rows are converted to immutable
domain models by ``forum.persistence.mappers``. They match the schema
defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (read-only for the comment subsystem)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("username", String(255), nullable=True),
    Column("email", String(255), nullable=True),
    Column("avatar", Text, nullable=True),
    Column("status", String(255), nullable=True),
    Column("role", String(50), nullable=False, server_default="user"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_username", users_table.c.username)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(300), nullable=False),
    Column("creator_id", UUID(as_uuid=True), nullable=False),
    # Cached number of top-level comments
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("comment_count >= 0", name="ck_posts_comment_count"),
)

Index("idx_posts_creator_id", posts_table.c.creator_id)

# ============================================================================
# COMMENTS TABLE (flat adjacency list: parent pointers only)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # No foreign key: comments outlive their creators' accounts
    Column("creator_id", UUID(as_uuid=True), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    CheckConstraint("length(content) > 0", name="ck_comments_content_not_empty"),
)

# Listing order is (created_at DESC, id DESC) within a parent or post
Index(
    "idx_comments_post_top_level",
    comments_table.c.post_id,
    comments_table.c.created_at.desc(),
    postgresql_where=comments_table.c.parent_id.is_(None),
)
Index(
    "idx_comments_parent_id",
    comments_table.c.parent_id,
    comments_table.c.created_at.desc(),
)
Index("idx_comments_creator_id", comments_table.c.creator_id)

# ============================================================================
# COMMENT LIKES TABLE (set semantics via composite primary key)
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column(
        "comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID(as_uuid=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("comment_id", "user_id", name="pk_comment_likes"),
)

Index("idx_comment_likes_user_id", comment_likes_table.c.user_id)
