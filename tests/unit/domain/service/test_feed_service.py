"""Unit tests for FeedService live queries."""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from uuid import uuid4

import pytest

from crushboard.domain.repository import (
    ChangeFeed,
    PostRepository,
    RecordStore,
)
from crushboard.domain.service import (
    FeedService,
    PostService,
    ReplyService,
    VoteService,
)
from crushboard.domain.value import (
    PostFilter,
    PostId,
    PrimaryTag,
    SortMode,
    UserId,
    VoteDirection,
)
from crushboard.persistence.repository.inmemory import InMemoryRecordStore, InMemoryStore
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

# Upper bound for a pushed snapshot to arrive
PUSH_TIMEOUT = 1.0


async def seed(unit_env):
    """Posts created in order: crush_low, roast_top, crush_top, crush_tied."""
    record_store = await unit_env.get(RecordStore)
    post_repo = await unit_env.get(PostRepository)
    crush_low = await make_post(record_store, post_repo, PrimaryTag.CRUSH, upvotes=1)
    roast_top = await make_post(record_store, post_repo, PrimaryTag.ROAST, upvotes=9)
    crush_top = await make_post(record_store, post_repo, PrimaryTag.CRUSH, upvotes=5)
    crush_tied = await make_post(record_store, post_repo, PrimaryTag.CRUSH, upvotes=1)
    return crush_low, roast_top, crush_top, crush_tied


class TestListPosts:
    """Tests for one-shot feed queries."""

    @pytest.mark.asyncio
    async def test_new_sort_is_newest_first(self, unit_env):
        post_service = await unit_env.get(PostService)
        crush_low, roast_top, crush_top, crush_tied = await seed(unit_env)

        posts = await post_service.list_posts(PostFilter(sort=SortMode.NEW))

        assert [p.id for p in posts] == [
            crush_tied.id,
            crush_top.id,
            roast_top.id,
            crush_low.id,
        ]

    @pytest.mark.asyncio
    async def test_hot_sort_breaks_ties_newest_first(self, unit_env):
        post_service = await unit_env.get(PostService)
        crush_low, roast_top, crush_top, crush_tied = await seed(unit_env)

        posts = await post_service.list_posts(PostFilter(sort=SortMode.HOT))

        assert [p.id for p in posts] == [
            roast_top.id,
            crush_top.id,
            crush_tied.id,
            crush_low.id,
        ]

    @pytest.mark.asyncio
    async def test_tag_filter_keeps_only_that_tag_in_sort_order(self, unit_env):
        """Filtering by #Crush returns only #Crush posts, still sorted."""
        # Arrange
        post_service = await unit_env.get(PostService)
        crush_low, _, crush_top, crush_tied = await seed(unit_env)

        # Act
        posts = await post_service.list_posts(
            PostFilter(sort=SortMode.HOT, tag=PrimaryTag.CRUSH)
        )

        # Assert
        assert all(p.primary_tag == PrimaryTag.CRUSH for p in posts)
        assert [p.id for p in posts] == [crush_top.id, crush_tied.id, crush_low.id]

    @pytest.mark.asyncio
    async def test_limit_caps_the_window(self, unit_env):
        post_service = await unit_env.get(PostService)
        await seed(unit_env)

        posts = await post_service.list_posts(PostFilter(limit=2))

        assert len(posts) == 2


class TestWatchPosts:
    """Tests for watch_posts."""

    @pytest.mark.asyncio
    async def test_initial_snapshot_then_push_on_new_post(self, unit_env):
        """A new post is pushed to an open feed."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        post_service = await unit_env.get(PostService)

        async with feed_service.watch_posts(PostFilter()) as snapshots:
            # Act
            initial = await anext(snapshots)
            post = await post_service.create_post(
                UserId(uuid4()), PrimaryTag.QUESTION, "Who left a rose on desk 12?"
            )
            pushed = await asyncio.wait_for(anext(snapshots), PUSH_TIMEOUT)

        # Assert
        assert initial.posts == []
        assert [p.id for p in pushed.posts] == [post.id]

    @pytest.mark.asyncio
    async def test_votes_reorder_a_hot_feed(self, unit_env):
        """Counter changes push a re-sorted snapshot."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        vote_service = await unit_env.get(VoteService)
        record_store = await unit_env.get(RecordStore)
        post_repo = await unit_env.get(PostRepository)
        older = await make_post(record_store, post_repo)
        newer = await make_post(record_store, post_repo)

        async with feed_service.watch_posts(PostFilter(sort=SortMode.HOT)) as snapshots:
            initial = await anext(snapshots)

            # Act
            await vote_service.cast_vote(UserId(uuid4()), older.id, VoteDirection.UP)
            pushed = await asyncio.wait_for(anext(snapshots), PUSH_TIMEOUT)

        # Assert
        assert [p.id for p in initial.posts] == [newer.id, older.id]
        assert [p.id for p in pushed.posts] == [older.id, newer.id]
        assert pushed.posts[0].score == 1

    @pytest.mark.asyncio
    async def test_leaving_the_feed_unregisters_the_listener(self, unit_env):
        """Nothing is delivered after teardown."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        post_service = await unit_env.get(PostService)
        change_feed = await unit_env.get(ChangeFeed)

        # Act
        async with feed_service.watch_posts(PostFilter()) as snapshots:
            await anext(snapshots)
            assert change_feed.listener_count == 1
        await post_service.create_post(UserId(uuid4()), PrimaryTag.DARE, "after")

        # Assert
        assert change_feed.listener_count == 0


class TestWatchPost:
    """Tests for watch_post."""

    @pytest.mark.asyncio
    async def test_reply_pushes_post_and_replies(self, unit_env):
        """A reply updates both the reply list and reply_count."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        reply_service = await unit_env.get(ReplyService)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )

        async with feed_service.watch_post(post.id) as snapshots:
            initial = await anext(snapshots)

            # Act
            reply = await reply_service.add_reply(post.id, UserId(uuid4()), "me too")
            pushed = await asyncio.wait_for(anext(snapshots), PUSH_TIMEOUT)

        # Assert
        assert initial.post == post
        assert initial.replies == []
        assert pushed.post.reply_count == 1
        assert pushed.replies == [reply]

    @pytest.mark.asyncio
    async def test_changes_to_other_posts_are_ignored(self, unit_env):
        """Writes elsewhere do not produce a snapshot."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        reply_service = await unit_env.get(ReplyService)
        record_store = await unit_env.get(RecordStore)
        post_repo = await unit_env.get(PostRepository)
        watched = await make_post(record_store, post_repo)
        other = await make_post(record_store, post_repo)

        async with feed_service.watch_post(watched.id) as snapshots:
            await anext(snapshots)

            # Act
            await reply_service.add_reply(other.id, UserId(uuid4()), "elsewhere")

            # Assert
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(anext(snapshots), 0.05)

    @pytest.mark.asyncio
    async def test_missing_post_gives_empty_snapshot(self, unit_env):
        feed_service = await unit_env.get(FeedService)

        async with feed_service.watch_post(PostId(uuid4())) as snapshots:
            snapshot = await anext(snapshots)

        assert snapshot.post is None
        assert snapshot.replies == []


    @pytest.mark.asyncio
    async def test_viewer_vote_is_attached(self, unit_env):
        # Arrange
        feed_service = await unit_env.get(FeedService)
        vote_service = await unit_env.get(VoteService)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )
        viewer = UserId(uuid4())

        async with feed_service.watch_post(post.id, viewer=viewer) as snapshots:
            initial = await anext(snapshots)

            # Act
            await vote_service.cast_vote(viewer, post.id, VoteDirection.DOWN)
            pushed = await asyncio.wait_for(anext(snapshots), PUSH_TIMEOUT)

        # Assert
        assert initial.my_vote is None
        assert pushed.my_vote == VoteDirection.DOWN
        assert pushed.post.score == -1


class TestViewerVotes:
    """Snapshots compare the viewer's votes as well as the posts."""

    @pytest.mark.asyncio
    async def test_own_vote_is_pushed_when_counters_do_not_move(self, unit_env):
        """Another user's toggle-off cancels out the viewer's upvote."""
        # Arrange
        feed_service = await unit_env.get(FeedService)
        vote_service = await unit_env.get(VoteService)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )
        viewer = UserId(uuid4())
        other = UserId(uuid4())
        await vote_service.cast_vote(other, post.id, VoteDirection.UP)

        async with feed_service.watch_posts(PostFilter(), viewer=viewer) as snapshots:
            initial = await anext(snapshots)

            # Act
            await vote_service.cast_vote(other, post.id, VoteDirection.UP)
            await vote_service.cast_vote(viewer, post.id, VoteDirection.UP)
            pushed = await asyncio.wait_for(anext(snapshots), PUSH_TIMEOUT)

        # Assert
        assert initial.posts == pushed.posts
        assert initial.my_votes == {}
        assert pushed.my_votes == {post.id: VoteDirection.UP}

    @pytest.mark.asyncio
    async def test_anonymous_viewer_has_no_votes(self, unit_env):
        feed_service = await unit_env.get(FeedService)
        vote_service = await unit_env.get(VoteService)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )
        await vote_service.cast_vote(UserId(uuid4()), post.id, VoteDirection.UP)

        async with feed_service.watch_posts(PostFilter()) as snapshots:
            snapshot = await anext(snapshots)

        assert snapshot.my_votes == {}
        assert snapshot.posts[0].upvotes == 1


class TrackingRecordStore(InMemoryRecordStore):
    """Counts the readers handed out and those still open."""

    def __init__(self, store: InMemoryStore, change_feed: ChangeFeed) -> None:
        super().__init__(store, change_feed)
        self.opened = 0
        self.open_readers = 0

    @asynccontextmanager
    async def reader(self):
        self.opened += 1
        self.open_readers += 1
        try:
            async with super().reader() as reader:
                yield reader
        finally:
            self.open_readers -= 1


async def next_snapshot(snapshots):
    return await anext(snapshots)


class TestSnapshotReads:
    """Live views hold no reader while they wait."""

    @pytest.mark.asyncio
    async def test_each_snapshot_uses_and_releases_its_own_reader(self, unit_env):
        # Arrange
        change_feed = await unit_env.get(ChangeFeed)
        tracking = TrackingRecordStore(await unit_env.get(InMemoryStore), change_feed)
        feed_service = FeedService(record_store=tracking, change_feed=change_feed)
        post_service = await unit_env.get(PostService)

        async with feed_service.watch_posts(PostFilter()) as snapshots:
            await anext(snapshots)
            waiting = asyncio.create_task(next_snapshot(snapshots))
            await asyncio.sleep(0)
            open_while_waiting = tracking.open_readers

            # Act
            await post_service.create_post(
                UserId(uuid4()), PrimaryTag.CRUSH, "Blue scarf, library, 3pm"
            )
            pushed = await asyncio.wait_for(waiting, PUSH_TIMEOUT)

        # Assert
        assert open_while_waiting == 0
        assert tracking.open_readers == 0
        assert tracking.opened == 2
        assert len(pushed.posts) == 1

    @pytest.mark.asyncio
    async def test_idle_views_hold_no_reader(self, unit_env):
        """Twenty idle feeds leave no reader open."""
        # Arrange
        change_feed = await unit_env.get(ChangeFeed)
        tracking = TrackingRecordStore(await unit_env.get(InMemoryStore), change_feed)
        feed_service = FeedService(record_store=tracking, change_feed=change_feed)

        # Act
        async with AsyncExitStack() as stack:
            for _ in range(20):
                stream = await stack.enter_async_context(
                    feed_service.watch_posts(PostFilter())
                )
                await anext(stream)
            open_while_idle = tracking.open_readers
            listeners = change_feed.listener_count

        # Assert
        assert open_while_idle == 0
        assert tracking.opened == 20
        assert listeners == 20
        assert change_feed.listener_count == 0
