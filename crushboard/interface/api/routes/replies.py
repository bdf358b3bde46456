"""Reply routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from crushboard.application.usecase.reply import (
    AddReplyRequest,
    AddReplyResponse,
    AddReplyUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
)
from crushboard.domain.error import DomainError
from crushboard.domain.service import JWTService
from crushboard.interface.error import domain_http_error, unexpected_http_error

router = APIRouter(tags=["replies"], route_class=DishkaRoute)


class AddReplyAPIRequest(BaseModel):
    """API request for replying to a post."""

    text: str = Field(max_length=2000)
    alias: str | None = Field(default=None, max_length=100)


@router.post(
    "/posts/{post_id}/replies",
    response_model=AddReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    post_id: UUID,
    request: AddReplyAPIRequest,
    add_reply_use_case: FromDishka[AddReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AddReplyResponse:
    """Reply to a post.

    Requires a verified user.

    Raises:
        HTTPException: 401/403 if not allowed to reply, 400 if the text is
            empty, 404 if the post does not exist
    """
    try:
        return await add_reply_use_case.execute(
            AddReplyRequest(
                post_id=str(post_id),
                text=request.text,
                alias=request.alias,
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("add reply", e)


@router.get("/posts/{post_id}/replies", response_model=ListRepliesResponse)
async def list_replies(
    post_id: UUID,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
) -> ListRepliesResponse:
    """List the replies of a post, oldest first.

    Raises:
        HTTPException: 404 if the post does not exist
    """
    try:
        return await list_replies_use_case.execute(
            ListRepliesRequest(post_id=str(post_id))
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("list replies", e)
