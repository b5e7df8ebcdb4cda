"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from forum.domain.model.user import UserSummary
from forum.domain.value import UserId


class UserRepository(ABC):
    """Read access to user identities for rendering comment creators."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[UserSummary]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> List[UserSummary]:
        """Find several users in one query.

        Args:
            user_ids: User IDs to look up

        Returns:
            The users that exist; unknown IDs are skipped
        """
        pass

    @abstractmethod
    async def save(self, user: UserSummary) -> UserSummary:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
