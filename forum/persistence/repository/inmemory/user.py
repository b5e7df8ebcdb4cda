"""In-memory user repository for testing."""

from typing import Iterable, Optional

from forum.domain.model.user import UserSummary
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, UserSummary] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[UserSummary]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> list[UserSummary]:
        """Find several users by ID."""
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def save(self, user: UserSummary) -> UserSummary:
        """Save or update a user."""
        self._users[user.id] = user
        return user

