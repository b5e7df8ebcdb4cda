"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from forum.domain.model import Comment, Post, UserSummary
from forum.domain.value import CommentId, PostId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> UserSummary:
    """Convert database row to UserSummary domain model.

    Args:
        row: Database row as dict

    Returns:
        UserSummary domain model
    """
    return UserSummary(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        username=row.get("username"),
        email=row.get("email"),
        avatar=row.get("avatar"),
        status=row.get("status"),
        role=row.get("role") or "user",
    )


def user_to_dict(user: UserSummary) -> Dict[str, Any]:
    """Convert UserSummary domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        creator_id=UserId(_uuid(row["creator_id"])),
        comment_count=row.get("comment_count", 0),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any], liked_by: Iterable[UUID] = ()) -> Comment:
    """Convert database row to Comment domain model.

    Likes live in their own table, so the liker IDs are passed alongside
    the comment row.

    Args:
        row: Database row as dict
        liked_by: IDs of the users that liked the comment

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        creator_id=UserId(_uuid(row["creator_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        liked_by=frozenset(UserId(_uuid(user_id)) for user_id in liked_by),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to a ``comments`` row.

    ``liked_by`` is excluded; likes are written to ``comment_likes``.
    """
    return comment.model_dump(exclude={"liked_by"})
