"""Post domain service."""

from uuid import uuid4

import logfire

from crushboard.domain.error import NotFoundError, ValidationError
from crushboard.domain.model.post import Post
from crushboard.domain.repository import PostRepository, RecordStore
from crushboard.domain.value import (
    TAG_MARKER,
    OptionalTag,
    PostFilter,
    PostId,
    PrimaryTag,
    UserId,
    normalize_alias,
)

from .base import Service


def parse_optional_tags(raw: str | None) -> list[OptionalTag]:
    """Parse a comma-separated tag list.

    Pieces are trimmed; empty pieces and pieces without the marker are
    dropped. ``"foo, #Bar, , #Baz"`` gives ``["#Bar", "#Baz"]``.
    """
    if not raw:
        return []
    pieces = (piece.strip() for piece in raw.split(","))
    return [
        OptionalTag(piece)
        for piece in pieces
        if len(piece) > len(TAG_MARKER) and piece.startswith(TAG_MARKER)
    ]


class PostService(Service):
    """Domain service for post operations."""

    span_prefix = "post_service"

    def __init__(
        self, post_repository: PostRepository, record_store: RecordStore
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            record_store: Store used to write new posts
        """
        self.post_repository = post_repository
        self.record_store = record_store

    async def create_post(
        self,
        user_id: UserId,
        primary_tag: PrimaryTag,
        message: str,
        optional_tags: str | None = None,
        alias: str | None = None,
    ) -> Post:
        """Create a post with zeroed counters.

        Args:
            user_id: Author
            primary_tag: Primary tag
            message: Post text (trimmed, must not be empty)
            optional_tags: Comma-separated tags
            alias: Display alias (defaults to "Anonymous")

        Returns:
            The stored post, with its store-assigned created_at

        Raises:
            ValidationError: If the message is empty
        """
        text = (message or "").strip()
        if not text:
            raise ValidationError("Your message cannot be empty!")

        with self.span(
            "create_post",
            user_id=str(user_id),
            primary_tag=primary_tag.value,
        ):
            post = Post(
                id=PostId(uuid4()),
                message=text,
                primary_tag=primary_tag,
                optional_tags=parse_optional_tags(optional_tags),
                alias=normalize_alias(alias),
                user_id=user_id,
                upvotes=0,
                downvotes=0,
                score=0,
                reply_count=0,
            )

            await self.record_store.batch().create_post(post).commit()

            saved = await self.post_repository.find_by_id(post.id)
            if saved is None:
                # Read-after-write on the same store
                raise NotFoundError("Post", str(post.id))

            logfire.info(
                "Post created",
                post_id=str(saved.id),
                primary_tag=saved.primary_tag.value,
                optional_tags=[tag.root for tag in saved.optional_tags],
            )
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with self.span("get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID, raising when it does not exist.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def list_posts(self, post_filter: PostFilter) -> list[Post]:
        """List posts for a feed.

        Args:
            post_filter: Sort mode, tag filter and limit

        Returns:
            Posts in feed order
        """
        with self.span(
            "list_posts",
            sort=post_filter.sort.value,
            tag=post_filter.tag.value if post_filter.tag else None,
            limit=post_filter.limit,
        ):
            posts = await self.post_repository.find_all(post_filter)
            logfire.info("Posts listed", count=len(posts))
            return posts
