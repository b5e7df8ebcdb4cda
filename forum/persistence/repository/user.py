"""PostgreSQL implementation of User repository."""

from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import UserSummary
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.guard import guarded
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Default deadline for each store call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    async def find_by_id(self, user_id: UserId) -> Optional[UserSummary]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await guarded(
            self.session.execute(stmt), "users.find_by_id", self.timeout_seconds
        )
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> List[UserSummary]:
        """Find several users in one query.

        Args:
            user_ids: User IDs to look up

        Returns:
            Users that exist, in no particular order
        """
        ids = list(user_ids)
        if not ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(ids))
        result = await guarded(
            self.session.execute(stmt), "users.find_by_ids", self.timeout_seconds
        )
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: UserSummary) -> UserSummary:
        """Insert or update a user.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )
        await guarded(self.session.execute(stmt), "users.save", self.timeout_seconds)
        await self.session.flush()
        return user
