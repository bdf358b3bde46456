"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from crushboard.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from crushboard.config import FeedSettings
from crushboard.domain.error import DomainError
from crushboard.domain.service import JWTService
from crushboard.domain.value import PrimaryTag, SortMode
from crushboard.interface.error import domain_http_error, unexpected_http_error

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    primary_tag: PrimaryTag
    message: str = Field(max_length=5000)
    optional_tags: str | None = Field(default=None, max_length=500)
    alias: str | None = Field(default=None, max_length=100)


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Publish a confession.

    Requires a verified user.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post

    Raises:
        HTTPException: 401/403 if not allowed to post, 400 if the message is empty
    """
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                primary_tag=request.primary_tag,
                message=request.message,
                optional_tags=request.optional_tags,
                alias=request.alias,
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("create post", e)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    feed_settings: FromDishka[FeedSettings],
    sort: SortMode = SortMode.NEW,
    tag: PrimaryTag | None = None,
    limit: int | None = Query(default=None, ge=1, le=500),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List the feed.

    Public endpoint. Signed-in callers also get their own vote per post.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        feed_settings: Feed settings (default page size)
        sort: "new" (newest first) or "hot" (highest score first)
        tag: Only posts with this primary tag, e.g. "#Crush"
        limit: Maximum number of posts (defaults to feed.page_size)
        auth_token: JWT token from cookie (optional)

    Returns:
        Posts in feed order
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                sort=sort,
                tag=tag,
                limit=limit or feed_settings.page_size,
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except Exception as e:
        raise unexpected_http_error("list posts", e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a single post.

    Raises:
        HTTPException: 404 if the post does not exist
    """
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("get post", e)
