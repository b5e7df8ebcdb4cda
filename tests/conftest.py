"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from forum.domain.model import Comment, Post, UserSummary
from forum.domain.value import CommentId, PostId, UserId

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_user(name: str = "Test User", **overrides) -> UserSummary:
    """Build a user summary with sensible defaults."""
    fields = {
        "id": UserId(uuid4()),
        "name": name,
        "username": name.lower().replace(" ", "_"),
        "email": f"{name.lower().replace(' ', '.')}@example.com",
    }
    fields.update(overrides)
    return UserSummary(**fields)


def make_post(creator_id: UserId | None = None, **overrides) -> Post:
    """Build a post with sensible defaults."""
    fields = {
        "id": PostId(uuid4()),
        "title": "Test Post",
        "creator_id": creator_id or UserId(uuid4()),
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    fields.update(overrides)
    return Post(**fields)


def make_comment(
    post_id: PostId,
    creator_id: UserId,
    parent_id: CommentId | None = None,
    content: str = "Test comment",
    minutes: int = 0,
    **overrides,
) -> Comment:
    """Build a comment created ``minutes`` after BASE_TIME."""
    created_at = BASE_TIME + timedelta(minutes=minutes)
    fields = {
        "id": CommentId(uuid4()),
        "post_id": post_id,
        "creator_id": creator_id,
        "parent_id": parent_id,
        "content": content,
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Comment(**fields)
