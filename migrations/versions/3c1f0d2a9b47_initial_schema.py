"""initial_schema

Create the schema for forum comments:
- Users (read-only reference for comment creators)
- Posts (comment targets, cached top-level comment count)
- Comments (flat adjacency list, threaded through parent_id)
- Comment likes (one row per user and comment)

Revision ID: 3c1f0d2a9b47
Revises:
Create Date: 2024-05-02 10:12:44.531207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0d2a9b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("status", sa.String(255), nullable=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="user"),
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
    )
    op.create_index("idx_users_username", "users", ["username"])

    # ========================================================================
    # POSTS
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
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
        sa.CheckConstraint("comment_count >= 0", name="ck_posts_comment_count"),
    )
    op.create_index("idx_posts_creator_id", "posts", ["creator_id"])

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "post_id",
            sa.UUID(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "parent_id",
            sa.UUID(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint(
            "length(content) > 0", name="ck_comments_content_not_empty"
        ),
    )
    op.create_index(
        "idx_comments_post_top_level",
        "comments",
        ["post_id", sa.text("created_at DESC")],
        postgresql_where=sa.text("parent_id IS NULL"),
    )
    op.create_index(
        "idx_comments_parent_id",
        "comments",
        ["parent_id", sa.text("created_at DESC")],
    )
    op.create_index("idx_comments_creator_id", "comments", ["creator_id"])

    # ========================================================================
    # COMMENT LIKES
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column(
            "comment_id",
            sa.UUID(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("comment_id", "user_id", name="pk_comment_likes"),
    )
    op.create_index("idx_comment_likes_user_id", "comment_likes", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_likes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("users")
