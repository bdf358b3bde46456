"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from crushboard.domain.model.vote import Vote
from crushboard.domain.repository.vote import VoteRepository
from crushboard.domain.value import PostId, UserId

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's vote on a post."""
        return self._store.votes.get((user_id, post_id))

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> list[Vote]:
        """Find a user's votes on several posts (batch query)."""
        if not post_ids:
            return []

        wanted = set(post_ids)
        return [
            v
            for (voter, post_id), v in self._store.votes.items()
            if voter == user_id and post_id in wanted
        ]
