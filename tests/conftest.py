"""Test configuration and shared helpers."""

from uuid import uuid4

import logfire

from crushboard.domain.model import Post, UserProfile
from crushboard.domain.repository import (
    PostRepository,
    RecordStore,
    UserProfileRepository,
)
from crushboard.domain.value import PostId, PrimaryTag, UserId, VerificationStatus

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


async def make_post(
    record_store: RecordStore,
    post_repository: PostRepository,
    primary_tag: PrimaryTag = PrimaryTag.CONFESSION,
    message: str = "I left my heart in the library",
    **counters: int,
) -> Post:
    """Write a post through a batch and read it back.

    Args:
        record_store: Store to write with
        post_repository: Repository to read the stored post from
        primary_tag: Primary tag of the post
        message: Post text
        **counters: Initial upvotes, downvotes, score or reply_count.
            score defaults to upvotes - downvotes.

    Returns:
        The stored post, with its store-assigned created_at
    """
    upvotes = counters.get("upvotes", 0)
    downvotes = counters.get("downvotes", 0)
    post = Post(
        id=PostId(uuid4()),
        message=message,
        primary_tag=primary_tag,
        user_id=UserId(uuid4()),
        upvotes=upvotes,
        downvotes=downvotes,
        score=counters.get("score", upvotes - downvotes),
        reply_count=counters.get("reply_count", 0),
    )
    await record_store.batch().create_post(post).commit()
    return await post_repository.find_by_id(post.id)


async def make_user(
    user_profile_repository: UserProfileRepository,
    status: VerificationStatus = VerificationStatus.VERIFIED,
) -> UserProfile:
    """Create a user profile with the given verification status."""
    return await user_profile_repository.save(
        UserProfile(id=UserId(uuid4()), verification_status=status)
    )
