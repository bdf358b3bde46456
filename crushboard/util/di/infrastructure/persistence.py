"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from crushboard.config import FeedSettings, Settings
from crushboard.domain.repository import (
    ChangeFeed,
    PostRepository,
    RecordStore,
    ReplyRepository,
    UserProfileRepository,
    VoteRepository,
)
from crushboard.persistence.changefeed import InProcessChangeFeed
from crushboard.persistence.database import create_engine, create_session_factory
from crushboard.persistence.repository import (
    PostgresPostRepository,
    PostgresRecordStore,
    PostgresReplyRepository,
    PostgresUserProfileRepository,
    PostgresVoteRepository,
)
from crushboard.util.di.base import ProviderBase
from crushboard.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide the instrumented database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_change_feed(self, feed_settings: FeedSettings) -> ChangeFeed:
        """Provide the process-wide change feed."""
        return InProcessChangeFeed(
            listener_queue_size=feed_settings.listener_queue_size
        )

    @provide(scope=Scope.APP)
    def get_record_store(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeed,
    ) -> RecordStore:
        """Provide the record store used for atomic write batches."""
        return PostgresRecordStore(session_factory, change_feed)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request session used by repository reads.

        Profile bootstrap writes are committed with it at the end of the
        request. Write batches do not use it; each commits in its own
        transaction.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Read session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_profile_repository(
        self, session: AsyncSession
    ) -> UserProfileRepository:
        """Provide UserProfile repository."""
        return PostgresUserProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reply_repository(self, session: AsyncSession) -> ReplyRepository:
        """Provide Reply repository."""
        return PostgresReplyRepository(session)
