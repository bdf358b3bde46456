"""In-memory reply repository for testing."""

from typing import Optional

from crushboard.domain.model.reply import Reply
from crushboard.domain.repository.reply import ReplyRepository
from crushboard.domain.value import PostId, ReplyId

from .store import InMemoryStore


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._store.replies.get(reply_id)

    async def find_by_post(self, post_id: PostId) -> list[Reply]:
        """Find all replies to a post, oldest first."""
        replies = [r for r in self._store.replies.values() if r.post_id == post_id]
        # Store-assigned timestamps are unique
        replies.sort(key=lambda r: r.created_at)
        return replies
