"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations over a flat
    parent-pointer store. Every listing returns comments newest first
    (``created_at`` descending, id descending as tie-breaker).

    Implementations raise ``StoreTimeout`` / ``StoreUnavailable`` when the
    underlying store fails.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find top-level comments of a post.

        Args:
            post_id: The post ID
            offset: Number of comments to skip
            limit: Maximum number of comments to return (None for all)

        Returns:
            Top-level comments, newest first
        """
        pass

    @abstractmethod
    async def count_top_level(self, post_id: PostId) -> int:
        """Count top-level comments of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments with no parent on the post
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find direct replies of a comment.

        Args:
            parent_id: The parent comment ID
            offset: Number of replies to skip
            limit: Maximum number of replies to return (None for all)

        Returns:
            Direct replies, newest first
        """
        pass

    @abstractmethod
    async def find_children_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, List[Comment]]:
        """Find direct replies for several parents in one query.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Mapping of parent ID to its replies (newest first). Parents
            without replies map to an empty list.
        """
        pass

    @abstractmethod
    async def find_child_ids_of_many(
        self, parent_ids: Iterable[CommentId]
    ) -> List[CommentId]:
        """Find the IDs of the direct replies of several parents.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            IDs of every comment whose parent is in ``parent_ids``
        """
        pass

    @abstractmethod
    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            Immediate-child count
        """
        pass

    @abstractmethod
    async def count_children_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several parents in one query.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Mapping of parent ID to immediate-child count (0 when none)
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a comment and bump ``updated_at``.

        Args:
            comment_id: The comment ID
            content: New content

        Returns:
            The updated comment, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def add_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Atomically add a user to the comment's liked-by set.

        Args:
            comment_id: The comment ID
            user_id: The user liking the comment

        Returns:
            True if the set changed, False if the user was already present
        """
        pass

    @abstractmethod
    async def remove_like(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Atomically remove a user from the comment's liked-by set.

        Args:
            comment_id: The comment ID
            user_id: The user withdrawing the like

        Returns:
            True if the set changed, False if the user was not present
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Iterable[CommentId]) -> int:
        """Hard delete a set of comments in a single operation.

        Args:
            comment_ids: IDs to remove

        Returns:
            Number of comments removed
        """
        pass
