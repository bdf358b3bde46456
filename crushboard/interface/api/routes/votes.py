"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from crushboard.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteRequest,
    GetVoteResponse,
    GetVoteUseCase,
)
from crushboard.domain.error import DomainError
from crushboard.domain.service import JWTService
from crushboard.domain.value import VoteDirection
from crushboard.interface.api.routes.auth import require_user_id
from crushboard.interface.error import domain_http_error, unexpected_http_error

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for a vote click."""

    direction: VoteDirection


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def cast_vote(
    post_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a post.

    Clicking the direction already voted removes the vote; clicking the
    other direction switches it. Requires a verified user.

    Args:
        post_id: Post UUID
        request: Direction clicked
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Resulting vote and the post's counters

    Raises:
        HTTPException: 401/403 if not allowed to vote, 404 if the post does not exist
    """
    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                post_id=str(post_id),
                direction=request.direction,
                user_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("cast vote", e)


@router.get("/posts/{post_id}/vote", response_model=GetVoteResponse)
async def get_vote(
    post_id: UUID,
    get_vote_use_case: FromDishka[GetVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetVoteResponse:
    """Get the caller's vote on a post.

    Raises:
        HTTPException: 401 if not authenticated
    """
    user_id = require_user_id(
        jwt_service.get_user_id_from_token(auth_token), "read your vote"
    )

    try:
        return await get_vote_use_case.execute(
            GetVoteRequest(post_id=str(post_id), user_id=user_id)
        )
    except Exception as e:
        raise unexpected_http_error("get vote", e)
