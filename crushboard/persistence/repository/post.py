"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from crushboard.domain.model import Post
from crushboard.domain.repository.post import PostRepository
from crushboard.domain.value import PostFilter, PostId, SortMode
from crushboard.persistence.mappers import row_to_post
from crushboard.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find posts ordered and filtered for a feed."""
        with logfire.span(
            "post_repository.find_all",
            sort=post_filter.sort.value,
            tag=post_filter.tag.value if post_filter.tag else None,
            limit=post_filter.limit,
        ):
            stmt = select(posts_table)

            # Exact primary tag match
            if post_filter.tag:
                stmt = stmt.where(posts_table.c.primary_tag == post_filter.tag.value)

            # Sort order
            if post_filter.sort == SortMode.HOT:
                stmt = stmt.order_by(
                    desc(posts_table.c.score), desc(posts_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(posts_table.c.created_at))

            stmt = stmt.limit(post_filter.limit)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]

            logfire.info("Found posts", count=len(posts))
            return posts
