"""In-memory post repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from crushboard.domain.model.post import Post
from crushboard.domain.repository.post import PostRepository
from crushboard.domain.value import PostFilter, PostId, SortMode

from .store import InMemoryStore

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._store.posts.get(post_id)

    async def find_all(self, post_filter: PostFilter) -> list[Post]:
        """Find posts ordered and filtered for a feed."""
        posts = list(self._store.posts.values())

        # Filter by primary tag
        if post_filter.tag is not None:
            posts = [p for p in posts if p.primary_tag == post_filter.tag]

        # Sort (both orders fall back to newest first)
        if post_filter.sort == SortMode.HOT:
            posts.sort(key=lambda p: (p.score, p.created_at or _EPOCH), reverse=True)
        else:
            posts.sort(key=lambda p: p.created_at or _EPOCH, reverse=True)

        return posts[: post_filter.limit]
