"""Comment entity.

Comments are threaded discussions on posts. The tree is stored flat: each
comment only knows its parent, never its children.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel, utcnow
from forum.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through ``parent_id`` alone:
    - None marks a top-level comment attached directly to the post
    - otherwise it references the comment being replied to

    Reply counts are never stored; they are computed from the parent
    pointers of other comments at read time.
    """

    id: CommentId
    post_id: PostId
    creator_id: UserId
    content: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    liked_by: frozenset[UserId] = frozenset()
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_top_level(self) -> bool:
        """Whether the comment hangs directly off its post."""
        return self.parent_id is None

    @property
    def likes_count(self) -> int:
        """Number of distinct users that liked the comment."""
        return len(self.liked_by)

    def is_created_by(self, user_id: UserId | None) -> bool:
        """Check whether ``user_id`` authored this comment."""
        return user_id is not None and self.creator_id == user_id
