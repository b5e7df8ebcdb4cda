"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.model.common import utcnow
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId
from forum.persistence.guard import guarded
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Default deadline for each store call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await guarded(
                self.session.execute(stmt), "posts.find_by_id", self.timeout_seconds
            )
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Insert a post, or update its title and count if it exists."""
        values = post_to_dict(post)
        stmt = insert(posts_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[posts_table.c.id],
            set_={
                "title": stmt.excluded.title,
                "comment_count": stmt.excluded.comment_count,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await guarded(self.session.execute(stmt), "posts.save", self.timeout_seconds)
        await self.session.flush()
        return post

    async def set_comment_count(self, post_id: PostId, count: int) -> None:
        """Store the cached comment count of a post."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=count, updated_at=utcnow())
        )
        await guarded(
            self.session.execute(stmt), "posts.set_comment_count", self.timeout_seconds
        )
        await self.session.flush()
