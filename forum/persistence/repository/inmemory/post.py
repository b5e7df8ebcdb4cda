"""In-memory post repository for testing."""

from typing import Optional

from forum.domain.model.common import utcnow
from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def set_comment_count(self, post_id: PostId, count: int) -> None:
        """Store the cached comment count of a post."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"comment_count": count, "updated_at": utcnow()}
            )
