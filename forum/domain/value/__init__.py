"""Domain value objects for the forum."""

from forum.domain.value.identifiers import CommentId, PostId, UserId
from forum.domain.value.types import AuthContext, ErrorKind

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "AuthContext",
    "ErrorKind",
]
