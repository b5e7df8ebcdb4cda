"""Presentation of comments to callers.

Every read and write path returns comments through ``CommentPresenter`` so
that default substitution and orphan handling are identical everywhere.
"""

from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel

from forum.domain.model import Comment, UserSummary
from forum.domain.service import CommentTreeNode, UserService
from forum.domain.value import UserId

DELETED_USER_NAME = "Deleted User"
UNKNOWN_USER_NAME = "Unknown User"
DEFAULT_ROLE = "user"


class CreatorItem(BaseModel):
    """Author of a comment as returned to callers."""

    id: str
    name: str
    username: str = ""
    email: str = ""
    avatar: str = ""
    status: str = ""
    role: str = DEFAULT_ROLE


class CommentItem(BaseModel):
    """Comment as returned to callers.

    Recursive structure: ``replies`` holds nested items when the read path
    expands them and is empty otherwise. ``replies_count`` is always the
    immediate-child count.
    """

    id: str
    content: str
    post_id: str
    parent_id: str | None
    creator: CreatorItem
    liked_by: list[str]
    likes_count: int
    replies: list["CommentItem"]
    replies_count: int
    # Replies exist below the depth limit but were not expanded
    truncated: bool = False
    created_at: str
    updated_at: str


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in canonical form.

    ISO-8601 in UTC with millisecond precision and a ``Z`` suffix, e.g.
    ``2024-01-01T12:00:00.000Z``. Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def creator_item(creator_id: UserId, user: UserSummary | None) -> CreatorItem:
    """Build the creator block, substituting the deleted-user sentinel."""
    if user is None:
        return CreatorItem(id=str(creator_id), name=DELETED_USER_NAME)

    return CreatorItem(
        id=str(user.id),
        name=user.name or UNKNOWN_USER_NAME,
        username=user.username or "",
        email=user.email or "",
        avatar=user.avatar or "",
        status=user.status or "",
        role=user.role or DEFAULT_ROLE,
    )


class CommentPresenter:
    """Maps comments and comment trees to ``CommentItem``.

    Creator references are resolved in one batch per call; unresolvable
    creators degrade to a "Deleted User" identity instead of failing.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize comment presenter.

        Args:
            user_service: Resolves creator references
        """
        self.user_service = user_service

    async def present_comment(self, comment: Comment, replies_count: int) -> CommentItem:
        """Present a single comment without nested replies.

        Args:
            comment: Comment to present
            replies_count: Immediate-child count of the comment

        Returns:
            Comment item with an empty ``replies`` list
        """
        user = await self.user_service.resolve_user(comment.creator_id)
        users = {comment.creator_id: user} if user else {}
        node = CommentTreeNode(comment=comment, replies_count=replies_count)
        return self._to_item(node, users)

    async def present_nodes(self, nodes: list[CommentTreeNode]) -> list[CommentItem]:
        """Present tree nodes, nested replies included.

        Args:
            nodes: Root nodes (leaves or fully expanded trees)

        Returns:
            One item per node, in the same order
        """
        users = await self.user_service.resolve_users(
            node.comment.creator_id for node in self._walk(nodes)
        )
        return [self._to_item(node, users) for node in nodes]

    def _to_item(
        self, node: CommentTreeNode, users: dict[UserId, UserSummary]
    ) -> CommentItem:
        comment = node.comment
        return CommentItem(
            id=str(comment.id),
            content=comment.content,
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            creator=creator_item(comment.creator_id, users.get(comment.creator_id)),
            liked_by=sorted(str(user_id) for user_id in comment.liked_by),
            likes_count=comment.likes_count,
            # Depth is bounded by the tree service's max_depth
            replies=[self._to_item(reply, users) for reply in node.replies],
            replies_count=node.replies_count,
            truncated=node.truncated,
            created_at=format_timestamp(comment.created_at),
            updated_at=format_timestamp(comment.updated_at),
        )

    @staticmethod
    def _walk(nodes: Iterable[CommentTreeNode]) -> Iterable[CommentTreeNode]:
        for root in nodes:
            yield from root.walk()
