"""Create post use case."""

import logfire
from pydantic import BaseModel

from crushboard.application.usecase.base import BaseUseCase, optional_user_id
from crushboard.application.usecase.post.common import PostItem
from crushboard.domain.service import PostService, UserProfileService
from crushboard.domain.value import PrimaryTag


class CreatePostRequest(BaseModel):
    """Create post request."""

    primary_tag: PrimaryTag
    message: str
    optional_tags: str | None = None  # Comma-separated, e.g. "#Library, #Exams"
    alias: str | None = None
    user_id: str | None = None  # User ID from authenticated user


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: PostItem


class CreatePostUseCase(BaseUseCase):
    """Use case for publishing a new confession."""

    def __init__(
        self, post_service: PostService, user_profile_service: UserProfileService
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_profile_service: User profile domain service
        """
        self.post_service = post_service
        self.user_profile_service = user_profile_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Check the caller is signed in and verified
        2. Create the post with zeroed counters (via PostService)

        Args:
            request: Create post request

        Returns:
            Create post response with the stored post

        Raises:
            NotAuthenticatedError: If not signed in
            NotVerifiedError: If the caller is not verified
            ValidationError: If the message is empty
        """
        profile = await self.user_profile_service.require_verified(
            optional_user_id(request.user_id), "create a post"
        )

        with logfire.span(
            "create_post.execute", primary_tag=request.primary_tag.value
        ):
            post = await self.post_service.create_post(
                user_id=profile.id,
                primary_tag=request.primary_tag,
                message=request.message,
                optional_tags=request.optional_tags,
                alias=request.alias,
            )
            return CreatePostResponse(post=PostItem.from_post(post))
