"""PostgreSQL implementation of Reply repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crushboard.domain.model import Reply
from crushboard.domain.repository import ReplyRepository
from crushboard.domain.value import PostId, ReplyId
from crushboard.persistence.mappers import row_to_reply
from crushboard.persistence.tables import replies_table


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(replies_table).where(replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Reply]:
        """Find all replies to a post, oldest first."""
        with logfire.span("reply_repository.find_by_post", post_id=str(post_id)):
            stmt = (
                select(replies_table)
                .where(replies_table.c.post_id == post_id)
                .order_by(replies_table.c.created_at, replies_table.c.id)
            )
            result = await self.session.execute(stmt)
            return [row_to_reply(row._asdict()) for row in result.fetchall()]
