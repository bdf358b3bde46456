"""Integration tests for PostgreSQL write batches.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... python scripts/run_migrations.py
    DATABASE__URL=postgresql+asyncpg://... pytest tests/integration
"""

import asyncio
import os
from contextlib import AsyncExitStack
from uuid import uuid4

import pytest

from crushboard.config import DatabaseSettings, Settings
from crushboard.domain.error import VoteConflictError
from crushboard.domain.model import Vote
from crushboard.domain.repository import (
    PostRepository,
    RecordStore,
    ReplyRepository,
    VoteRepository,
)
from crushboard.domain.service import FeedService, ReplyService, VoteService
from crushboard.domain.value import PostFilter, PrimaryTag, SortMode, UserId, VoteDirection
from tests.conftest import make_post
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="PostgreSQL not configured"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})

# A single pooled connection: live views must not hold it while they wait
POOL_SIZE = 1
single_connection_env = create_env_fixture(
    unmock={"persistence"},
    settings=Settings(
        environment="test",
        database=DatabaseSettings(
            url=Settings().database.url,
            pool_size=POOL_SIZE,
            max_overflow=0,
            pool_timeout=2.0,
        ),
    ),
)


class TestPostgresWriteBatchIntegration:
    """Integration tests for PostgresWriteBatch."""

    @pytest.mark.asyncio
    async def test_vote_sequence_keeps_counters_consistent(self, integration_env):
        # Arrange
        vote_service = await integration_env.get(VoteService)
        post_repo = await integration_env.get(PostRepository)
        post = await make_post(await integration_env.get(RecordStore), post_repo)
        user_a = UserId(uuid4())
        user_b = UserId(uuid4())

        # Act
        await vote_service.cast_vote(user_a, post.id, VoteDirection.UP)
        await vote_service.cast_vote(user_b, post.id, VoteDirection.UP)
        await vote_service.cast_vote(user_a, post.id, VoteDirection.DOWN)
        await vote_service.cast_vote(user_a, post.id, VoteDirection.DOWN)

        # Assert
        updated = await post_repo.find_by_id(post.id)
        assert (updated.upvotes, updated.downvotes, updated.score) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_stale_insert_conflicts_and_rolls_back(self, integration_env):
        """A second 'first vote' for the same pair applies nothing."""
        # Arrange
        record_store = await integration_env.get(RecordStore)
        post_repo = await integration_env.get(PostRepository)
        vote_repo = await integration_env.get(VoteRepository)
        post = await make_post(record_store, post_repo)
        vote = Vote(user_id=UserId(uuid4()), post_id=post.id, direction=VoteDirection.UP)
        await record_store.batch().put_vote(vote).increment_post(
            post.id, upvotes=1, score=1
        ).commit()

        stale = record_store.batch().increment_post(post.id, upvotes=1, score=1)
        stale.put_vote(vote, expected=None)

        # Act & Assert
        with pytest.raises(VoteConflictError):
            await stale.commit()

        assert (await post_repo.find_by_id(post.id)).upvotes == 1
        assert await vote_repo.find_by_user_and_post(vote.user_id, post.id) == vote

    @pytest.mark.asyncio
    async def test_reply_and_counter_commit_together(self, integration_env):
        # Arrange
        reply_service = await integration_env.get(ReplyService)
        reply_repo = await integration_env.get(ReplyRepository)
        post_repo = await integration_env.get(PostRepository)
        post = await make_post(
            await integration_env.get(RecordStore), post_repo, reply_count=3
        )

        # Act
        reply = await reply_service.add_reply(post.id, UserId(uuid4()), "hello")

        # Assert
        assert (await post_repo.find_by_id(post.id)).reply_count == 4
        assert [r.id for r in await reply_repo.find_by_post(post.id)] == [reply.id]

    @pytest.mark.asyncio
    async def test_tag_filter_and_hot_order(self, integration_env):
        # Arrange
        record_store = await integration_env.get(RecordStore)
        post_repo = await integration_env.get(PostRepository)
        tag = PrimaryTag.QUESTION
        low = await make_post(record_store, post_repo, tag, upvotes=1)
        high = await make_post(record_store, post_repo, tag, upvotes=3)

        # Act
        posts = await post_repo.find_all(
            PostFilter(sort=SortMode.HOT, tag=tag, limit=500)
        )

        # Assert
        ids = [p.id for p in posts]
        assert all(p.primary_tag == tag for p in posts)
        assert ids.index(high.id) < ids.index(low.id)


class TestLiveViewsIntegration:
    """Live views against a pool with a single connection."""

    @pytest.mark.asyncio
    async def test_more_views_than_connections(self, single_connection_env):
        # Arrange
        record_store = await single_connection_env.get(RecordStore)
        feed_service = await single_connection_env.get(FeedService)
        tag = PrimaryTag.DARE
        post_filter = PostFilter(sort=SortMode.NEW, tag=tag, limit=500)

        async with AsyncExitStack() as stack:
            streams = []
            for _ in range(POOL_SIZE + 4):
                stream = await stack.enter_async_context(
                    feed_service.watch_posts(post_filter)
                )
                await anext(stream)
                streams.append(stream)

            # Act
            async with record_store.reader() as reader:
                post = await make_post(record_store, reader.posts, tag)
            pushed = await asyncio.wait_for(
                asyncio.gather(*(anext(stream) for stream in streams)), timeout=10
            )

        # Assert
        assert all(snapshot.posts[0].id == post.id for snapshot in pushed)
