"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator, AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from civic.config import Settings
from civic.domain.repository import (
    CommentEditRepository,
    CommentRepository,
    VoteRepository,
)
from civic.persistence.database import create_engine, create_session_factory
from civic.persistence.repository import (
    PostgresCommentEditRepository,
    PostgresCommentRepository,
    PostgresVoteRepository,
)
from civic.util.di.base import ProviderBase
from civic.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
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
    ) -> AsyncGenerator[AsyncSession, BaseException | None]:
        """Provide database session for request scope.

        The container hands the request's exception (or None) back to this
        generator when the scope closes: the session commits on None and
        rolls back otherwise.
        """
        async with session_factory() as session:
            error = yield session
            if error is not None:
                logfire.warn("Session rollback", error=str(error))
                await session.rollback()
                return
            await session.commit()
            logfire.debug("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_edit_repository(
        self, session: AsyncSession
    ) -> CommentEditRepository:
        """Provide CommentEdit repository."""
        return PostgresCommentEditRepository(session)
