"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from spark.config import Settings
from spark.domain.repository import (
    ActivityRepository,
    BookmarkRepository,
    CommentRepository,
    IdeaRepository,
    PreferencesRepository,
    UnitOfWork,
    UserRepository,
    VoteRepository,
)
from spark.persistence.database import create_engine, create_session_factory
from spark.persistence.repository import (
    PostgresActivityRepository,
    PostgresBookmarkRepository,
    PostgresCommentRepository,
    PostgresIdeaRepository,
    PostgresPreferencesRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
    SqlAlchemyUnitOfWork,
)
from spark.util.di.base import ProviderBase
from spark.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

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
        """One session per request, shared by every repository and the unit of work.

        Whatever the use case has not committed itself is committed when the
        request finishes cleanly and rolled back when it raises.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn(
                    "Request session rolled back", error_type=type(e).__name__
                )
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide the request's unit of work."""
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_idea_repository(self, session: AsyncSession) -> IdeaRepository:
        """Provide Idea repository."""
        return PostgresIdeaRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_bookmark_repository(self, session: AsyncSession) -> BookmarkRepository:
        """Provide Bookmark repository."""
        return PostgresBookmarkRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_activity_repository(self, session: AsyncSession) -> ActivityRepository:
        """Provide Activity repository."""
        return PostgresActivityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_preferences_repository(
        self, session: AsyncSession
    ) -> PreferencesRepository:
        """Provide Preferences repository."""
        return PostgresPreferencesRepository(session)
