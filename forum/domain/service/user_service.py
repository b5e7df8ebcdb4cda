"""User domain service."""

from typing import Iterable

import logfire

from forum.domain.model import UserSummary
from forum.domain.repository import UserRepository
from forum.domain.value import UserId

from .base import Service


class UserService(Service):
    """Resolves user references for presentation.

    Missing users are reported as absent rather than raised: a deleted
    account must not break reads of the comments it left behind.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def resolve_user(self, user_id: UserId) -> UserSummary | None:
        """Look up a single user.

        Args:
            user_id: User ID

        Returns:
            The user, or None if the account no longer exists
        """
        with logfire.span("user_service.resolve_user", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
            return user

    async def resolve_users(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, UserSummary]:
        """Look up several users at once.

        Args:
            user_ids: User IDs (duplicates allowed)

        Returns:
            Mapping of user ID to user for every ID that exists
        """
        unique_ids = set(user_ids)
        if not unique_ids:
            return {}

        with logfire.span("user_service.resolve_users", count=len(unique_ids)):
            users = await self.user_repository.find_by_ids(unique_ids)
            resolved = {user.id: user for user in users}

            missing = len(unique_ids) - len(resolved)
            if missing:
                logfire.warn("Unresolvable user references", missing=missing)

            return resolved

