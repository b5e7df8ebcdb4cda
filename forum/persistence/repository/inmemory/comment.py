"""In-memory comment repository for testing."""

from typing import Iterable, Optional

from forum.domain.model.comment import Comment
from forum.domain.model.common import utcnow
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, PostId, UserId


def _newest_first(comments: list[Comment]) -> list[Comment]:
    return sorted(comments, key=lambda c: (c.created_at, c.id), reverse=True)


def _page(comments: list[Comment], offset: int, limit: Optional[int]) -> list[Comment]:
    if limit is None:
        return comments[offset:]
    return comments[offset : offset + limit]


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Every mutation completes without awaiting, so on a single event loop
    each one is atomic just like its SQL counterpart.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_top_level(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Comment]:
        """Find top-level comments of a post, newest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]
        return _page(_newest_first(comments), offset, limit)

    async def count_top_level(self, post_id: PostId) -> int:
        """Count top-level comments of a post."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        )

    async def find_children(
        self,
        parent_id: CommentId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Comment]:
        """Find direct replies of a comment, newest first."""
        comments = [c for c in self._comments.values() if c.parent_id == parent_id]
        return _page(_newest_first(comments), offset, limit)

    async def find_children_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, list[Comment]]:
        """Find direct replies for several parents."""
        children: dict[CommentId, list[Comment]] = {pid: [] for pid in parent_ids}
        for comment in _newest_first(list(self._comments.values())):
            if comment.parent_id in children:
                children[comment.parent_id].append(comment)
        return children

    async def find_child_ids_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> list[CommentId]:
        """Find the IDs of the direct replies of several parents."""
        parents = set(parent_ids)
        return [c.id for c in self._comments.values() if c.parent_id in parents]

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment."""
        return sum(1 for c in self._comments.values() if c.parent_id == parent_id)

    async def count_children_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several parents."""
        counts: dict[CommentId, int] = {pid: 0 for pid in parent_ids}
        for comment in self._comments.values():
            if comment.parent_id in counts:
                counts[comment.parent_id] += 1
        return counts

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(update={"content": content, "updated_at": utcnow()})
        self._comments[comment_id] = updated
        return updated

    async def add_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Add ``user_id`` to the liked-by set."""
        comment = self._comments.get(comment_id)
        if comment is None or user_id in comment.liked_by:
            return False

        self._comments[comment_id] = comment.model_copy(
            update={"liked_by": comment.liked_by | {user_id}, "updated_at": utcnow()}
        )
        return True

    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove ``user_id`` from the liked-by set."""
        comment = self._comments.get(comment_id)
        if comment is None or user_id not in comment.liked_by:
            return False

        self._comments[comment_id] = comment.model_copy(
            update={"liked_by": comment.liked_by - {user_id}, "updated_at": utcnow()}
        )
        return True

    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Delete comments by ID."""
        deleted = 0
        for comment_id in set(comment_ids):
            if self._comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted
