"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from typing import Any, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, desc, func, literal, select, update
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.model.common import utcnow
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.guard import guarded
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comment_likes_table, comments_table

# Newest first; id breaks ties between equal timestamps
NEWEST_FIRST = (desc(comments_table.c.created_at), desc(comments_table.c.id))


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Likes are kept in ``comment_likes`` and attached to comments in one
    extra query per read.
    """

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Default deadline for each store call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    async def _execute(self, stmt: Any, operation: str) -> Any:
        return await guarded(
            self.session.execute(stmt),
            f"comments.{operation}",
            self.timeout_seconds,
        )

    async def _load_likes(self, comment_ids: List[UUID]) -> dict[UUID, List[UUID]]:
        if not comment_ids:
            return {}
        stmt = select(
            comment_likes_table.c.comment_id, comment_likes_table.c.user_id
        ).where(comment_likes_table.c.comment_id.in_(comment_ids))
        result = await self._execute(stmt, "load_likes")

        likes: dict[UUID, List[UUID]] = defaultdict(list)
        for comment_id, user_id in result.fetchall():
            likes[comment_id].append(user_id)
        return likes

    async def _to_comments(self, rows: List[Any]) -> List[Comment]:
        records = [row._asdict() for row in rows]
        likes = await self._load_likes([record["id"] for record in records])
        return [
            row_to_comment(record, likes.get(record["id"], ())) for record in records
        ]

    async def _find(self, stmt: Any, operation: str) -> List[Comment]:
        result = await self._execute(stmt, operation)
        return await self._to_comments(result.fetchall())

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        comments = await self._find(stmt, "find_by_id")
        return comments[0] if comments else None

    async def find_top_level(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find top-level comments of a post, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(*NEWEST_FIRST)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._find(stmt, "find_top_level")

    async def count_top_level(self, post_id: PostId) -> int:
        """Count top-level comments of a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
        )
        result = await self._execute(stmt, "count_top_level")
        return result.scalar() or 0

    async def find_children(
        self,
        parent_id: CommentId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find direct replies of a comment, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*NEWEST_FIRST)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._find(stmt, "find_children")

    async def find_children_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, List[Comment]]:
        """Find direct replies for several parents in one query."""
        ids = list(parent_ids)
        children: dict[CommentId, List[Comment]] = {parent_id: [] for parent_id in ids}
        if not ids:
            return children

        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(ids))
            .order_by(*NEWEST_FIRST)
        )
        for comment in await self._find(stmt, "find_children_of_many"):
            children[comment.parent_id].append(comment)
        return children

    async def find_child_ids_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> List[CommentId]:
        """Find the IDs of the direct replies of several parents."""
        ids = list(parent_ids)
        if not ids:
            return []

        stmt = select(comments_table.c.id).where(comments_table.c.parent_id.in_(ids))
        result = await self._execute(stmt, "find_child_ids_of_many")
        return [CommentId(row.id) for row in result.fetchall()]

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == parent_id)
        )
        result = await self._execute(stmt, "count_children")
        return result.scalar() or 0

    async def count_children_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several parents in one query."""
        ids = list(parent_ids)
        counts: dict[CommentId, int] = {parent_id: 0 for parent_id in ids}
        if not ids:
            return counts

        stmt = (
            select(comments_table.c.parent_id, func.count().label("replies"))
            .where(comments_table.c.parent_id.in_(ids))
            .group_by(comments_table.c.parent_id)
        )
        result = await self._execute(stmt, "count_children_many")
        for row in result.fetchall():
            counts[CommentId(row.parent_id)] = row.replies
        return counts

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment together with its likes."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self._execute(stmt, "save")

        if comment.liked_by:
            likes = insert(comment_likes_table).values(
                [
                    {"comment_id": comment.id, "user_id": user_id}
                    for user_id in comment.liked_by
                ]
            )
            await self._execute(likes.on_conflict_do_nothing(), "save_likes")

        await self.session.flush()
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a comment and bump ``updated_at``."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(content=content, updated_at=utcnow())
            .returning(comments_table)
        )
        result = await self._execute(stmt, "update_content")
        row = result.fetchone()

        if row is None:
            # Comment not found
            return None

        await self.session.flush()
        comments = await self._to_comments([row])
        return comments[0]

    async def add_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Atomically add ``user_id`` to the liked-by set.

        The insert selects from ``comments`` so that a like on a missing
        comment inserts nothing instead of violating the foreign key.
        """
        source = select(
            comments_table.c.id,
            literal(user_id, type_=PG_UUID(as_uuid=True)),
        ).where(comments_table.c.id == comment_id)
        stmt = (
            insert(comment_likes_table)
            .from_select(["comment_id", "user_id"], source)
            .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
        )
        result = await self._execute(stmt, "add_like")
        changed = result.rowcount > 0

        if changed:
            await self._touch(comment_id)
        await self.session.flush()
        return changed

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Atomically remove ``user_id`` from the liked-by set."""
        stmt = (
            delete(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
            .where(comment_likes_table.c.user_id == user_id)
        )
        result = await self._execute(stmt, "remove_like")
        changed = result.rowcount > 0

        if changed:
            await self._touch(comment_id)
        await self.session.flush()
        return changed

    async def _touch(self, comment_id: CommentId) -> None:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(updated_at=utcnow())
        )
        await self._execute(stmt, "touch")

    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Delete comments by ID in a single statement (hard delete)."""
        ids = list(comment_ids)
        if not ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(ids))
        result = await self._execute(stmt, "delete_many")
        await self.session.flush()
        return result.rowcount
