"""Cascading comment deletion."""

import logfire

from forum.domain.error import AuthorizationError
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, UserId

from .base import Service
from .comment_service import CommentService


class CommentDeletionService(Service):
    """Removes a comment together with every transitive reply.

    Deletion happens in two phases: the descendant set is collected
    breadth-first, then removed with a single bulk delete. Nothing is
    mutated until collection has finished, so a store failure during
    collection leaves the tree untouched.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize comment deletion service.

        Args:
            comment_repository: Comment repository
            comment_service: Comment domain service
        """
        self.comment_repository = comment_repository
        self.comment_service = comment_service

    async def collect_descendant_ids(self, comment_id: CommentId) -> list[CommentId]:
        """Collect the IDs of all transitive replies of a comment.

        Each level costs one batched query. A visited set guarantees every
        comment is examined once.

        Args:
            comment_id: Root of the subtree

        Returns:
            Descendant IDs in breadth-first order (the root excluded)
        """
        visited: set[CommentId] = {comment_id}
        descendants: list[CommentId] = []
        frontier = [comment_id]

        while frontier:
            child_ids = await self.comment_repository.find_child_ids_of_many(frontier)
            frontier = [child_id for child_id in child_ids if child_id not in visited]
            visited.update(frontier)
            descendants.extend(frontier)

        return descendants

    async def delete_subtree(self, comment_id: CommentId, requester_id: UserId) -> int:
        """Delete a comment owned by the requester and all of its replies.

        Args:
            comment_id: Comment to delete
            requester_id: User attempting the delete

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment does not exist
            AuthorizationError: If the requester is not the creator
        """
        with logfire.span(
            "comment_deletion_service.delete_subtree",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            comment = await self.comment_service.get_comment_by_id(comment_id)
            if not comment.is_created_by(requester_id):
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                )
                raise AuthorizationError("comment", str(comment_id), str(requester_id))

            descendants = await self.collect_descendant_ids(comment_id)
            deleted = await self.comment_repository.delete_many(
                [comment_id, *descendants]
            )

            logfire.info(
                "Comment subtree deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                descendants=len(descendants),
                deleted=deleted,
            )

            if comment.is_top_level:
                await self.comment_service.refresh_post_comment_count(comment.post_id)

            return deleted
