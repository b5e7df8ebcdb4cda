"""Paginated single-level comment listing."""

from dataclasses import dataclass

import logfire

from forum.config import CommentSettings
from forum.domain.error import ValidationError
from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId

from .base import Service
from .comment_service import CommentService
from .comment_tree_service import CommentTreeNode
from .post_service import PostService


@dataclass
class CommentPage:
    """One page of sibling comments.

    Items are leaf nodes: ``replies`` is empty while ``replies_count``
    still reports the immediate-child count.
    """

    items: list[CommentTreeNode]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        """Whether another page follows this one."""
        return self.page * self.limit < self.total


class CommentPageService(Service):
    """Reads one level of the comment tree at a time.

    Unlike the tree materializer it never looks below the requested
    level, so the cost of a page is bounded regardless of tree shape.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment page service.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            settings: Comment configuration (page size limits)
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.settings = settings

    def resolve_paging(self, page: int | None, limit: int | None) -> tuple[int, int]:
        """Apply defaults and bounds to paging parameters.

        Args:
            page: 1-based page number (None for the first page)
            limit: Page size (None for the configured default)

        Returns:
            Tuple of (page, limit)

        Raises:
            ValidationError: If page or limit is out of range
        """
        page = 1 if page is None else page
        limit = self.settings.default_page_size if limit is None else limit

        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")
        if limit > self.settings.max_page_size:
            raise ValidationError(
                f"Limit cannot exceed {self.settings.max_page_size}"
            )
        return page, limit

    async def list_top_level(
        self,
        post_id: PostId,
        page: int | None = None,
        limit: int | None = None,
        count_replies: bool = True,
    ) -> CommentPage:
        """List one page of a post's top-level comments.

        Args:
            post_id: Post ID
            page: 1-based page number
            limit: Page size
            count_replies: Whether to fill in reply counts; callers that
                expand the page themselves pass False

        Returns:
            The requested page, newest first

        Raises:
            ValidationError: If paging parameters are invalid
            NotFoundError: If the post does not exist
        """
        page, limit = self.resolve_paging(page, limit)
        with logfire.span(
            "comment_page_service.list_top_level",
            post_id=str(post_id),
            page=page,
            limit=limit,
        ):
            await self.post_service.require_post(post_id)

            total = await self.comment_service.count_top_level(post_id)
            comments = await self.comment_service.find_top_level(
                post_id, skip=(page - 1) * limit, limit=limit
            )
            if count_replies:
                items = await self._as_leaves(comments)
            else:
                items = [CommentTreeNode(comment=comment) for comment in comments]

            logfire.info(
                "Top-level comments listed",
                post_id=str(post_id),
                total=total,
                returned=len(items),
            )
            return CommentPage(items=items, total=total, page=page, limit=limit)

    async def list_replies(
        self,
        comment_id: CommentId,
        page: int | None = None,
        limit: int | None = None,
    ) -> CommentPage:
        """List one page of a comment's direct replies.

        Args:
            comment_id: Parent comment ID
            page: 1-based page number
            limit: Page size

        Returns:
            The requested page, newest first

        Raises:
            ValidationError: If paging parameters are invalid
            NotFoundError: If the parent comment does not exist
        """
        page, limit = self.resolve_paging(page, limit)
        with logfire.span(
            "comment_page_service.list_replies",
            comment_id=str(comment_id),
            page=page,
            limit=limit,
        ):
            await self.comment_service.get_comment_by_id(comment_id)

            total = await self.comment_service.count_children(comment_id)
            replies = await self.comment_service.find_children(
                comment_id, skip=(page - 1) * limit, limit=limit
            )
            items = await self._as_leaves(replies)

            logfire.info(
                "Replies listed",
                comment_id=str(comment_id),
                total=total,
                returned=len(items),
            )
            return CommentPage(items=items, total=total, page=page, limit=limit)

    async def _as_leaves(self, comments: list[Comment]) -> list[CommentTreeNode]:
        """Wrap comments as unexpanded nodes with their reply counts."""
        counts = await self.comment_service.count_children_many(
            comment.id for comment in comments
        )
        return [
            CommentTreeNode(
                comment=comment,
                replies=[],
                replies_count=counts.get(comment.id, 0),
            )
            for comment in comments
        ]
