"""User summary as seen by the comment subsystem.

Account management lives elsewhere; comments only need enough of a user
to render its creator.
"""

from typing import Optional

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId


class UserSummary(DomainModel):
    """Public identity of a user."""

    id: UserId
    name: str
    username: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    status: Optional[str] = None
    role: str = "user"
