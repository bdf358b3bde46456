"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from crushboard.domain.model.reply import Reply
from crushboard.domain.value import PostId, ReplyId


class ReplyRepository(ABC):
    """Read access to the Reply collection."""

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Reply]:
        """Find all replies to a post, oldest first.

        Args:
            post_id: The post ID

        Returns:
            Replies ordered by created_at ASC
        """
        pass
