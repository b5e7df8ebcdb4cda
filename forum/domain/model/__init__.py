"""Domain model entities for the forum."""

from forum.domain.model.comment import Comment
from forum.domain.model.post import Post
from forum.domain.model.user import UserSummary

__all__ = [
    "Comment",
    "Post",
    "UserSummary",
]
