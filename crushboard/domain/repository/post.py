"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from crushboard.domain.model.post import Post
from crushboard.domain.value import PostFilter, PostId


class PostRepository(ABC):
    """Read access to the Post collection.

    Posts are written through a WriteBatch so that creation and counter
    updates publish change notifications.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find posts ordered and filtered for a feed.

        Ordering:
        - SortMode.NEW: created_at DESC
        - SortMode.HOT: score DESC, then created_at DESC

        Args:
            post_filter: Sort mode, optional primary tag and limit

        Returns:
            Posts matching the filter, in feed order
        """
        pass
