"""PostgreSQL write batches.

Each batch runs in its own transaction, independent of the request
session, so it commits (or rolls back) as a unit before returning.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

import logfire
from sqlalchemy import and_, delete, insert, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crushboard.domain.error import NotFoundError, VoteConflictError
from crushboard.domain.repository import (
    ChangeFeed,
    RecordReader,
    RecordStore,
    WriteBatch,
)
from crushboard.domain.repository.batch import (
    BatchOperation,
    CreatePost,
    CreateReply,
    DeleteVote,
    IncrementPost,
    PutVote,
)
from crushboard.persistence.mappers import post_to_dict, reply_to_dict, vote_to_dict
from crushboard.persistence.repository.post import PostgresPostRepository
from crushboard.persistence.repository.reply import PostgresReplyRepository
from crushboard.persistence.repository.vote import PostgresVoteRepository
from crushboard.persistence.tables import posts_table, replies_table, votes_table


class PostgresWriteBatch(WriteBatch):
    """WriteBatch applied in a single PostgreSQL transaction.

    Vote writes are conditional on the expected ledger state: a statement
    that matches no row means another writer got there first.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeed,
    ) -> None:
        super().__init__(change_feed)
        self._session_factory = session_factory

    async def _apply(self, operations: Sequence[BatchOperation]) -> None:
        with logfire.span("write_batch.commit", operations=len(operations)):
            # begin() commits on success and rolls back on any exception
            async with self._session_factory.begin() as session:
                for op in operations:
                    await self._apply_one(session, op)

    async def _apply_one(self, session: AsyncSession, op: BatchOperation) -> None:
        if isinstance(op, CreatePost):
            await session.execute(insert(posts_table).values(**post_to_dict(op.post)))

        elif isinstance(op, PutVote):
            vote = op.vote
            if op.expected is None:
                stmt = (
                    pg_insert(votes_table)
                    .values(**vote_to_dict(vote))
                    .on_conflict_do_nothing(
                        index_elements=[votes_table.c.user_id, votes_table.c.post_id]
                    )
                )
            else:
                stmt = (
                    update(votes_table)
                    .where(
                        and_(
                            votes_table.c.user_id == vote.user_id,
                            votes_table.c.post_id == vote.post_id,
                            votes_table.c.direction == op.expected.value,
                        )
                    )
                    .values(direction=vote.direction.value)
                )
            result = await session.execute(stmt)
            if result.rowcount != 1:  # type: ignore[attr-defined]
                raise VoteConflictError(str(vote.user_id), str(vote.post_id))

        elif isinstance(op, DeleteVote):
            stmt = delete(votes_table).where(
                and_(
                    votes_table.c.user_id == op.user_id,
                    votes_table.c.post_id == op.post_id,
                    votes_table.c.direction == op.expected.value,
                )
            )
            result = await session.execute(stmt)
            if result.rowcount != 1:  # type: ignore[attr-defined]
                raise VoteConflictError(str(op.user_id), str(op.post_id))

        elif isinstance(op, CreateReply):
            await session.execute(
                insert(replies_table).values(**reply_to_dict(op.reply))
            )

        elif isinstance(op, IncrementPost):
            # Signed increments, never absolute values
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == op.post_id)
                .values(
                    upvotes=posts_table.c.upvotes + op.upvotes,
                    downvotes=posts_table.c.downvotes + op.downvotes,
                    score=posts_table.c.score + op.score,
                    reply_count=posts_table.c.reply_count + op.reply_count,
                )
            )
            result = await session.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError("Post", str(op.post_id))


class PostgresRecordStore(RecordStore):
    """RecordStore handing out PostgresWriteBatch instances."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeed,
    ) -> None:
        self._session_factory = session_factory
        self._change_feed = change_feed

    def batch(self) -> WriteBatch:
        """Start a new, empty batch."""
        return PostgresWriteBatch(self._session_factory, self._change_feed)

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[RecordReader]:
        """Repositories over a session of their own.

        Closing the session ends its read transaction and returns the
        connection to the pool.
        """
        async with self._session_factory() as session:
            yield RecordReader(
                posts=PostgresPostRepository(session),
                votes=PostgresVoteRepository(session),
                replies=PostgresReplyRepository(session),
            )
