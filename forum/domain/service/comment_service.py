"""Comment domain service."""

from typing import Iterable
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from forum.config import CommentSettings
from forum.domain.error import AuthorizationError, NotFoundError, ValidationError
from forum.domain.model.comment import Comment
from forum.domain.model.common import utcnow
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId

from .base import Service
from .post_service import PostService


class CommentService(Service):
    """Domain service for individual comment records.

    Holds no tree logic: creation, lookup, content edits and single-level
    queries only.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service
            settings: Comment configuration
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.settings = settings

    def validate_content(self, content: str | None) -> str:
        """Normalize comment content.

        Args:
            content: Raw content

        Returns:
            Content with surrounding whitespace removed

        Raises:
            ValidationError: If content is missing, blank or too long
        """
        text = (content or "").strip()
        if not text:
            raise ValidationError("Comment cannot be empty")
        if len(text) > self.settings.max_content_length:
            raise ValidationError(
                f"Comment cannot exceed {self.settings.max_content_length} characters"
            )
        return text

    async def create_comment(
        self,
        content: str,
        post_id: PostId,
        creator_id: UserId,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        The parent must already exist, so a new comment can never close a
        cycle: its own ID is only minted here.

        Args:
            content: Comment text
            post_id: Post ID
            creator_id: Author user ID
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If content is empty or the parent belongs to
                another post
            NotFoundError: If the post or the parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            creator_id=str(creator_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = self.validate_content(content)

            if not await self.post_service.post_exists(post_id):
                raise NotFoundError("Post", str(post_id))


            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))
                if (
                    self.settings.enforce_parent_post_match
                    and parent.post_id != post_id
                ):
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                creator_id=creator_id,
                content=text,
                parent_id=parent_id,
                liked_by=frozenset(),
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.comment_repository.save(comment)
            except IntegrityError:
                # The post or parent was deleted after the checks above
                logfire.warn(
                    "Comment target vanished before insert",
                    post_id=str(post_id),
                    parent_id=str(parent_id) if parent_id else None,
                )
                if parent_id:
                    raise NotFoundError("Parent comment", str(parent_id))
                raise NotFoundError("Post", str(post_id))

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )

            if saved.is_top_level:
                await self.refresh_post_comment_count(post_id)

            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def update_content(
        self, comment_id: CommentId, content: str, requester_id: UserId
    ) -> Comment:
        """Replace the content of a comment owned by the requester.

        Args:
            comment_id: Comment ID
            content: New content
            requester_id: User attempting the edit

        Returns:
            Updated comment

        Raises:
            ValidationError: If the new content is empty
            NotFoundError: If the comment does not exist
            AuthorizationError: If the requester is not the creator
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            requester_id=str(requester_id),
        ):
            text = self.validate_content(content)

            comment = await self.get_comment_by_id(comment_id)
            if not comment.is_created_by(requester_id):
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    requester_id=str(requester_id),
                )
                raise AuthorizationError("comment", str(comment_id), str(requester_id))

            updated = await self.comment_repository.update_content(comment_id, text)
            if updated is None:
                # Removed between the ownership check and the write
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                content_length=len(updated.content),
            )
            return updated

    async def count_children(self, parent_id: CommentId) -> int:
        """Count the immediate replies of a comment.

        Args:
            parent_id: Parent comment ID

        Returns:
            Immediate-child count
        """
        return await self.comment_repository.count_children(parent_id)

    async def count_children_many(
        self, parent_ids: Iterable[CommentId]
    ) -> dict[CommentId, int]:
        """Count immediate replies for several comments at once.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Mapping of comment ID to immediate-child count
        """
        ids = list(parent_ids)
        if not ids:
            return {}
        return await self.comment_repository.count_children_many(ids)

    async def find_children(
        self,
        parent_id: CommentId,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Comment]:
        """List direct replies of a comment, newest first.

        Args:
            parent_id: Parent comment ID
            skip: Number of replies to skip
            limit: Maximum number of replies (None for all)

        Returns:
            Replies ordered by ``created_at`` descending
        """
        return await self.comment_repository.find_children(
            parent_id, offset=skip, limit=limit
        )

    async def find_top_level(
        self,
        post_id: PostId,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Comment]:
        """List top-level comments of a post, newest first.

        Args:
            post_id: Post ID
            skip: Number of comments to skip
            limit: Maximum number of comments (None for all)

        Returns:
            Top-level comments ordered by ``created_at`` descending
        """
        return await self.comment_repository.find_top_level(
            post_id, offset=skip, limit=limit
        )

    async def count_top_level(self, post_id: PostId) -> int:
        """Count top-level comments of a post."""
        return await self.comment_repository.count_top_level(post_id)

    async def refresh_post_comment_count(self, post_id: PostId) -> int:
        """Recompute the post's cached comment count from the store.

        Args:
            post_id: Post ID

        Returns:
            The recomputed count
        """
        count = await self.comment_repository.count_top_level(post_id)
        await self.post_service.update_comment_count(post_id, count)
        return count
