"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from crushboard.domain.error import NotFoundError, VoteConflictError
from crushboard.domain.model import Vote
from crushboard.domain.repository import (
    ChangeFeed,
    PostRepository,
    RecordStore,
    VoteRepository,
)
from crushboard.domain.service import PostService, VoteService, compute_vote_delta
from crushboard.domain.value import PostId, UserId, VoteDirection
from crushboard.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryRecordStore,
    InMemoryStore,
    InMemoryVoteRepository,
)
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN


def counters(post) -> tuple[int, int, int]:
    return (post.upvotes, post.downvotes, post.score)


class TestComputeVoteDelta:
    """Tests for compute_vote_delta."""

    @pytest.mark.parametrize(
        "current, direction, expected",
        [
            (None, UP, (1, 0, 1, UP)),
            (None, DOWN, (0, 1, -1, DOWN)),
            (UP, UP, (-1, 0, -1, None)),
            (DOWN, DOWN, (0, -1, 1, None)),
            (DOWN, UP, (1, -1, 2, UP)),
            (UP, DOWN, (-1, 1, -2, DOWN)),
        ],
    )
    def test_delta_for_every_transition(self, current, direction, expected):
        """Each (current, clicked) pair yields the documented delta."""
        delta = compute_vote_delta(current, direction)

        assert (
            delta.upvotes,
            delta.downvotes,
            delta.score,
            delta.new_direction,
        ) == expected


class TestCastVote:
    """Tests for cast_vote method."""

    @pytest.mark.asyncio
    async def test_first_upvote_creates_vote_and_counts_it(self, unit_env):
        """Upvoting a post should create the vote and bump the counters."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)
        user_id = UserId(uuid4())

        # Act
        result = await vote_service.cast_vote(user_id, post.id, UP)

        # Assert
        assert result == UP
        vote = await vote_repo.find_by_user_and_post(user_id, post.id)
        assert vote.direction == UP
        assert counters(await post_repo.find_by_id(post.id)) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_same_direction_twice_restores_counters(self, unit_env):
        """Up then up should toggle the vote off."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(
            await unit_env.get(RecordStore), post_repo, upvotes=4, downvotes=2
        )
        user_id = UserId(uuid4())

        # Act
        await vote_service.cast_vote(user_id, post.id, UP)
        result = await vote_service.cast_vote(user_id, post.id, UP)

        # Assert
        assert result is None
        assert await vote_repo.find_by_user_and_post(user_id, post.id) is None
        assert counters(await post_repo.find_by_id(post.id)) == (4, 2, 2)

    @pytest.mark.asyncio
    async def test_switching_up_to_down_moves_score_by_two(self, unit_env):
        """Up then down: upvotes -1, downvotes +1, score -2."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)
        user_id = UserId(uuid4())
        await vote_service.cast_vote(user_id, post.id, UP)
        before = await post_repo.find_by_id(post.id)

        # Act
        result = await vote_service.cast_vote(user_id, post.id, DOWN)

        # Assert
        after = await post_repo.find_by_id(post.id)
        assert result == DOWN
        assert after.upvotes == before.upvotes - 1
        assert after.downvotes == before.downvotes + 1
        assert after.score == before.score - 2

    @pytest.mark.asyncio
    async def test_two_voters_sequence(self, unit_env):
        """Two users voting keep one vote each and consistent counters."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)
        user_a = UserId(uuid4())
        user_b = UserId(uuid4())

        steps = [
            (user_a, UP, (1, 0, 1)),
            (user_b, UP, (2, 0, 2)),
            (user_a, DOWN, (1, 1, 0)),
            (user_a, DOWN, (1, 0, 1)),
        ]

        # Act & Assert
        for user_id, direction, expected in steps:
            await vote_service.cast_vote(user_id, post.id, direction)
            current = await post_repo.find_by_id(post.id)
            assert counters(current) == expected
            assert current.score == current.upvotes - current.downvotes

        assert await vote_repo.find_by_user_and_post(user_a, post.id) is None
        vote_b = await vote_repo.find_by_user_and_post(user_b, post.id)
        assert vote_b.direction == UP

    @pytest.mark.asyncio
    async def test_vote_on_missing_post_raises_not_found(self, unit_env):
        """Voting on a post that does not exist should fail."""
        # Arrange
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await vote_service.cast_vote(UserId(uuid4()), PostId(uuid4()), UP)


class TestCastVoteConcurrency:
    """Tests for ledger changes between the read and the commit."""

    @staticmethod
    async def build(unit_env, rival_votes: int, max_retries: int):
        store = await unit_env.get(InMemoryStore)
        change_feed = await unit_env.get(ChangeFeed)
        record_store = RivalRecordStore(store, change_feed, rival_votes)
        post_service = PostService(InMemoryPostRepository(store), record_store)
        vote_service = VoteService(
            vote_repository=InMemoryVoteRepository(store),
            record_store=record_store,
            post_service=post_service,
            max_retries=max_retries,
        )
        post = await make_post(
            InMemoryRecordStore(store, change_feed), InMemoryPostRepository(store)
        )
        return vote_service, record_store, post

    @pytest.mark.asyncio
    async def test_stale_read_retries_without_double_count(self, unit_env):
        """A vote landing after the read forces a re-read and a recomputed delta."""
        # Arrange
        vote_service, record_store, post = await self.build(
            unit_env, rival_votes=1, max_retries=3
        )
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        user_id = UserId(uuid4())
        record_store.voter = user_id

        # Act - the rival click (up) commits first, ours (up) then toggles it off
        result = await vote_service.cast_vote(user_id, post.id, UP)

        # Assert
        assert result is None
        assert await vote_repo.find_by_user_and_post(user_id, post.id) is None
        assert counters(await post_repo.find_by_id(post.id)) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_conflict_surfaces_when_retries_are_exhausted(self, unit_env):
        """Without retries left the conflict is raised and nothing is applied."""
        # Arrange
        vote_service, record_store, post = await self.build(
            unit_env, rival_votes=1, max_retries=0
        )
        post_repo = await unit_env.get(PostRepository)
        user_id = UserId(uuid4())
        record_store.voter = user_id

        # Act & Assert
        with pytest.raises(VoteConflictError):
            await vote_service.cast_vote(user_id, post.id, DOWN)

        # Only the rival's upvote is counted
        assert counters(await post_repo.find_by_id(post.id)) == (1, 0, 1)


class RivalRecordStore(InMemoryRecordStore):
    """Commits a competing upvote by ``voter`` before handing out a batch."""

    def __init__(self, store, change_feed, rival_votes: int) -> None:
        super().__init__(store, change_feed)
        self.rival_votes = rival_votes
        self.voter: UserId | None = None

    def batch(self):
        batch = super().batch()
        if self.rival_votes > 0:
            self.rival_votes -= 1
            # Same user, same post: a second tab clicking at the same time
            post_id = next(iter(self._store.posts))
            self._store.votes[(self.voter, post_id)] = Vote(
                user_id=self.voter, post_id=post_id, direction=UP
            )
            post = self._store.posts[post_id]
            self._store.posts[post_id] = post.model_copy(
                update={"upvotes": post.upvotes + 1, "score": post.score + 1}
            )
        return batch
