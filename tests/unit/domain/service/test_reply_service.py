"""Unit tests for ReplyService."""

from uuid import uuid4

import pytest

from crushboard.domain.error import NotFoundError, ValidationError
from crushboard.domain.repository import PostRepository, RecordStore, ReplyRepository
from crushboard.domain.service import ReplyService
from crushboard.domain.value import PostId, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAddReply:
    """Tests for add_reply method."""

    @pytest.mark.asyncio
    async def test_add_reply_increments_reply_count(self, unit_env):
        """Replying stores the reply and bumps reply_count by one."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        reply_repo = await unit_env.get(ReplyRepository)
        post = await make_post(
            await unit_env.get(RecordStore), post_repo, reply_count=3
        )
        user_id = UserId(uuid4())

        # Act
        reply = await reply_service.add_reply(post.id, user_id, "  same here  ")

        # Assert
        assert reply.post_id == post.id
        assert reply.text == "same here"
        assert reply.alias == "Anonymous"
        assert reply.created_at is not None
        assert await reply_repo.find_by_id(reply.id) == reply

        updated = await post_repo.find_by_id(post.id)
        assert updated.reply_count == 4
        # Vote counters are untouched
        assert (updated.upvotes, updated.downvotes, updated.score) == (
            post.upvotes,
            post.downvotes,
            post.score,
        )

    @pytest.mark.asyncio
    async def test_replies_are_listed_oldest_first(self, unit_env):
        """get_replies_for_post returns replies in creation order."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await make_post(
            await unit_env.get(RecordStore), await unit_env.get(PostRepository)
        )
        user_id = UserId(uuid4())

        # Act
        for text in ["first", "second", "third"]:
            await reply_service.add_reply(post.id, user_id, text, alias="Owl")
        replies = await reply_service.get_replies_for_post(post.id)

        # Assert
        assert [r.text for r in replies] == ["first", "second", "third"]
        assert all(r.alias == "Owl" for r in replies)
        reply_repo = await unit_env.get(ReplyRepository)
        stored = await unit_env.get(PostRepository)
        assert len(await reply_repo.find_by_post(post.id)) == 3
        assert (await stored.find_by_id(post.id)).reply_count == 3

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected(self, unit_env):
        """Whitespace-only replies are rejected before any write."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(await unit_env.get(RecordStore), post_repo)

        # Act & Assert
        with pytest.raises(ValidationError):
            await reply_service.add_reply(post.id, UserId(uuid4()), "   ")
        assert (await post_repo.find_by_id(post.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_reply_to_missing_post_raises_not_found(self, unit_env):
        """Replying to a post that does not exist fails."""
        reply_service = await unit_env.get(ReplyService)

        with pytest.raises(NotFoundError):
            await reply_service.add_reply(PostId(uuid4()), UserId(uuid4()), "hello?")
