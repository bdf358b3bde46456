"""Vote domain service.

Keeps the Vote Ledger and the post vote counters consistent. Every vote
action turns into one WriteBatch holding the ledger write and signed
counter increments.
"""

from typing import Optional, Sequence

import logfire

from crushboard.domain.error import NotFoundError, VoteConflictError
from crushboard.domain.model.vote import Vote
from crushboard.domain.repository import RecordStore, VoteRepository
from crushboard.domain.value import PostId, UserId, VoteDelta, VoteDirection

from .base import Service
from .post_service import PostService


def compute_vote_delta(
    current: Optional[VoteDirection], direction: VoteDirection
) -> VoteDelta:
    """Compute counter changes for casting ``direction`` over ``current``.

    - Same direction again: the vote is toggled off.
    - Otherwise an opposite vote is withdrawn and the new one counted.

    Args:
        current: Direction stored in the ledger (None if no vote)
        direction: Direction the user clicked

    Returns:
        Counter changes and the resulting ledger state
    """
    if current == direction:
        if direction == VoteDirection.UP:
            return VoteDelta(upvotes=-1, new_direction=None)
        return VoteDelta(downvotes=-1, new_direction=None)

    upvotes = 0
    downvotes = 0
    if current == VoteDirection.UP:
        upvotes -= 1
    elif current == VoteDirection.DOWN:
        downvotes -= 1

    if direction == VoteDirection.UP:
        upvotes += 1
    else:
        downvotes += 1

    return VoteDelta(upvotes=upvotes, downvotes=downvotes, new_direction=direction)


class VoteService(Service):
    """Domain service for vote operations."""

    span_prefix = "vote_service"

    def __init__(
        self,
        vote_repository: VoteRepository,
        record_store: RecordStore,
        post_service: PostService,
        max_retries: int = 3,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote ledger reads
            record_store: Store used to commit vote batches
            post_service: Post domain service
            max_retries: Re-reads allowed when the ledger changed concurrently
        """
        self.vote_repository = vote_repository
        self.record_store = record_store
        self.post_service = post_service
        self.max_retries = max_retries

    async def get_vote_direction(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[VoteDirection]:
        """Get the user's current vote on a post.

        Args:
            user_id: User ID
            post_id: Post ID

        Returns:
            Current direction, None if the user has not voted
        """
        vote = await self.vote_repository.find_by_user_and_post(user_id, post_id)
        return vote.direction if vote else None

    async def cast_vote(
        self, user_id: UserId, post_id: PostId, direction: VoteDirection
    ) -> Optional[VoteDirection]:
        """Cast, switch or toggle off a vote.

        The ledger state is read outside the commit. The batch only applies
        if the ledger still holds that state; otherwise the vote is
        recomputed from a fresh read.

        Args:
            user_id: Voting user
            post_id: Post voted on
            direction: Direction clicked

        Returns:
            The user's vote on the post after the operation

        Raises:
            NotFoundError: If the post does not exist
            VoteConflictError: If the ledger kept changing for every attempt
        """
        with self.span(
            "cast_vote",
            post_id=str(post_id),
            user_id=str(user_id),
            direction=direction.value,
        ):
            post = await self.post_service.get_post_by_id(post_id)
            if not post:
                logfire.warn("Vote on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            for attempt in range(self.max_retries + 1):
                current = await self.get_vote_direction(user_id, post_id)
                delta = compute_vote_delta(current, direction)

                batch = self.record_store.batch()
                if delta.new_direction is None:
                    batch.delete_vote(user_id, post_id, expected=direction)
                else:
                    batch.put_vote(
                        Vote(
                            user_id=user_id,
                            post_id=post_id,
                            direction=delta.new_direction,
                        ),
                        expected=current,
                    )
                batch.increment_post(
                    post_id,
                    upvotes=delta.upvotes,
                    downvotes=delta.downvotes,
                    score=delta.score,
                )

                try:
                    await batch.commit()
                except VoteConflictError:
                    logfire.warn(
                        "Vote ledger changed before commit",
                        post_id=str(post_id),
                        user_id=str(user_id),
                        attempt=attempt,
                    )
                    if attempt >= self.max_retries:
                        raise
                    continue

                logfire.info(
                    "Vote cast",
                    post_id=str(post_id),
                    user_id=str(user_id),
                    previous=current.value if current else None,
                    current=delta.new_direction.value if delta.new_direction else None,
                    upvotes_delta=delta.upvotes,
                    downvotes_delta=delta.downvotes,
                )
                return delta.new_direction

            raise VoteConflictError(str(user_id), str(post_id))

    async def get_user_votes_for_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> dict[PostId, Optional[VoteDirection]]:
        """Look up the user's vote on each post.

        Args:
            user_id: User ID
            post_ids: Posts to check

        Returns:
            Mapping of post ID to the user's direction (None if not voted)
        """
        if not post_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_posts(user_id, post_ids)
        by_post = {vote.post_id: vote.direction for vote in votes}
        return {post_id: by_post.get(post_id) for post_id in post_ids}
