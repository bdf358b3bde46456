"""Unit tests for the verification gate on mutating use cases."""

from uuid import uuid4

import pytest

from crushboard.application.usecase.post import CreatePostRequest, CreatePostUseCase
from crushboard.application.usecase.reply import AddReplyRequest, AddReplyUseCase
from crushboard.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from crushboard.domain.error import NotAuthenticatedError, NotVerifiedError
from crushboard.domain.repository import (
    PostRepository,
    RecordStore,
    UserProfileRepository,
    VoteRepository,
)
from crushboard.domain.value import (
    PostFilter,
    PrimaryTag,
    VerificationStatus,
    VoteDirection,
)
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_verified_user_creates_post(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        user = await make_user(await unit_env.get(UserProfileRepository))

        # Act
        response = await use_case.execute(
            CreatePostRequest(
                primary_tag=PrimaryTag.CONFESSION,
                message="I still have your pen from first year",
                optional_tags="#Sorry, pen",
                user_id=str(user.id),
            )
        )

        # Assert
        assert response.post.optional_tags == ["#Sorry"]
        assert response.post.alias == "Anonymous"
        assert response.post.my_vote is None

    @pytest.mark.asyncio
    async def test_pending_user_cannot_post(self, unit_env):
        """Nothing is written for an unverified caller."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        user = await make_user(
            await unit_env.get(UserProfileRepository), VerificationStatus.PENDING
        )

        # Act & Assert
        with pytest.raises(NotVerifiedError):
            await use_case.execute(
                CreatePostRequest(
                    primary_tag=PrimaryTag.CRUSH,
                    message="hello",
                    user_id=str(user.id),
                )
            )
        assert await post_repo.find_all(PostFilter()) == []

    @pytest.mark.asyncio
    async def test_anonymous_caller_cannot_post(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                CreatePostRequest(primary_tag=PrimaryTag.CRUSH, message="hello")
            )


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_response_carries_direction_and_counters(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post = await make_post(
            await unit_env.get(RecordStore),
            await unit_env.get(PostRepository),
            upvotes=2,
        )
        user = await make_user(await unit_env.get(UserProfileRepository))

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                post_id=str(post.id),
                direction=VoteDirection.DOWN,
                user_id=str(user.id),
            )
        )

        # Assert
        assert response.direction == VoteDirection.DOWN
        assert (response.upvotes, response.downvotes, response.score) == (2, 1, 1)

    @pytest.mark.asyncio
    async def test_unverified_vote_is_not_recorded(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)
        user = await make_user(
            await unit_env.get(UserProfileRepository), VerificationStatus.UNVERIFIED
        )

        # Act & Assert
        with pytest.raises(NotVerifiedError):
            await use_case.execute(
                CastVoteRequest(
                    post_id=str(post.id),
                    direction=VoteDirection.UP,
                    user_id=str(user.id),
                )
            )
        assert await vote_repo.find_by_user_and_post(user.id, post.id) is None
        assert (await post_repo.find_by_id(post.id)).upvotes == 0


class TestAddReplyUseCase:
    """Tests for AddReplyUseCase."""

    @pytest.mark.asyncio
    async def test_rejected_user_cannot_reply(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AddReplyUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)
        user = await make_user(
            await unit_env.get(UserProfileRepository), VerificationStatus.REJECTED
        )

        # Act & Assert
        with pytest.raises(NotVerifiedError):
            await use_case.execute(
                AddReplyRequest(post_id=str(post.id), text="hey", user_id=str(user.id))
            )
        assert (await post_repo.find_by_id(post.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_verified_user_replies(self, unit_env):
        use_case = await unit_env.get(AddReplyUseCase)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )
        user = await make_user(await unit_env.get(UserProfileRepository))

        response = await use_case.execute(
            AddReplyRequest(
                post_id=str(post.id), text="same", alias="Night Owl", user_id=str(user.id)
            )
        )

        assert response.reply.post_id == str(post.id)
        assert response.reply.alias == "Night Owl"
