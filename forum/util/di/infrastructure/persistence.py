"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum.config import Settings, StoreSettings
from forum.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from forum.persistence.database import create_engine, create_session_factory
from forum.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        A cascade delete therefore either removes the whole subtree or
        nothing.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(
        self, session: AsyncSession, store: StoreSettings
    ) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session, timeout_seconds=store.timeout_seconds)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(
        self, session: AsyncSession, store: StoreSettings
    ) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session, timeout_seconds=store.timeout_seconds)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, session: AsyncSession, store: StoreSettings
    ) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(
            session, timeout_seconds=store.timeout_seconds
        )
