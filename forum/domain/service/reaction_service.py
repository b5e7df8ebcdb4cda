"""Comment like/unlike toggling."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, UserId

from .base import Service
from .comment_service import CommentService


class ReactionService(Service):
    """Adds and removes users from a comment's liked-by set.

    Both operations are idempotent and rely on atomic set primitives of
    the store, so concurrent toggles on one comment cannot lose updates.
    Any authenticated user may react to any comment.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize reaction service.

        Args:
            comment_repository: Comment repository
            comment_service: Comment domain service
        """
        self.comment_repository = comment_repository
        self.comment_service = comment_service

    async def like(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Add a like from ``user_id`` (no-op if already liked).

        Args:
            comment_id: Comment ID
            user_id: User liking the comment

        Returns:
            The comment as stored after the operation

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "reaction_service.like", comment_id=str(comment_id), user_id=str(user_id)
        ):
            await self.comment_service.get_comment_by_id(comment_id)
            changed = await self.comment_repository.add_like(comment_id, user_id)
            comment = await self._reload(comment_id)
            logfire.info(
                "Comment liked" if changed else "Comment already liked",
                comment_id=str(comment_id),
                likes_count=comment.likes_count,
            )
            return comment

    async def unlike(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Remove the like of ``user_id`` (no-op if not liked).

        Args:
            comment_id: Comment ID
            user_id: User withdrawing the like

        Returns:
            The comment as stored after the operation

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "reaction_service.unlike", comment_id=str(comment_id), user_id=str(user_id)
        ):
            await self.comment_service.get_comment_by_id(comment_id)
            changed = await self.comment_repository.remove_like(comment_id, user_id)
            comment = await self._reload(comment_id)
            logfire.info(
                "Comment unliked" if changed else "Comment was not liked",
                comment_id=str(comment_id),
                likes_count=comment.likes_count,
            )
            return comment

    async def _reload(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            # Removed by a concurrent cascade; the reaction is lost with it
            logfire.warn("Comment vanished during reaction", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment
