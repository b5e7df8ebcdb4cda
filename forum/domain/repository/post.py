"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Only the operations the comment subsystem needs: existence checks and
    the comment-count cache.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def set_comment_count(self, post_id: PostId, count: int) -> None:
        """Overwrite the cached comment count of a post.

        Args:
            post_id: The post ID
            count: Freshly computed count
        """
        pass
