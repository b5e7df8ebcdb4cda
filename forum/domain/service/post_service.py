"""Post domain service."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model.post import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for the post operations comments depend on."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def post_exists(self, post_id: PostId) -> bool:
        """Check whether a post exists.

        Args:
            post_id: Post ID

        Returns:
            True if the post exists
        """
        return await self.get_post_by_id(post_id) is not None

    async def require_post(self, post_id: PostId) -> Post:
        """Get a post or fail.

        Args:
            post_id: Post ID

        Returns:
            The post

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def update_comment_count(self, post_id: PostId, count: int) -> None:
        """Store a freshly computed comment count on the post.

        Args:
            post_id: Post ID
            count: Number of top-level comments currently on the post
        """
        with logfire.span(
            "post_service.update_comment_count", post_id=str(post_id), count=count
        ):
            await self.post_repository.set_comment_count(post_id, count)
            logfire.info("Comment count refreshed", post_id=str(post_id), count=count)
