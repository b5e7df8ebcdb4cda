"""Post aggregate, reduced to what comments depend on."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel, utcnow
from forum.domain.value import PostId, UserId


class Post(DomainModel):
    """Post that comments attach to.

    ``comment_count`` caches the number of top-level comments. It is
    recomputed from the comment store after every create and delete.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    creator_id: UserId
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
