"""Profile routes (identity verification)."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, Field

from crushboard.application.usecase.profile import (
    ResetVerificationRequest,
    ResetVerificationResponse,
    ResetVerificationUseCase,
    SubmitVerificationRequest,
    SubmitVerificationResponse,
    SubmitVerificationUseCase,
)
from crushboard.domain.error import DomainError
from crushboard.domain.service import JWTService
from crushboard.interface.api.routes.auth import require_user_id
from crushboard.interface.error import domain_http_error, unexpected_http_error

router = APIRouter(prefix="/profile", tags=["profile"], route_class=DishkaRoute)


class SubmitVerificationAPIRequest(BaseModel):
    """API request for submitting an ID photo."""

    id_card_url: str = Field(min_length=1, max_length=2000)


@router.post("/verification", response_model=SubmitVerificationResponse)
async def submit_verification(
    request: SubmitVerificationAPIRequest,
    submit_verification_use_case: FromDishka[SubmitVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitVerificationResponse:
    """Submit a college ID for verification.

    The photo itself is uploaded to file storage by the client; only its
    reference is recorded. The profile moves to pending.

    Raises:
        HTTPException: 401 if not authenticated, 409 if not unverified
    """
    user_id = require_user_id(
        jwt_service.get_user_id_from_token(auth_token), "submit verification"
    )

    try:
        return await submit_verification_use_case.execute(
            SubmitVerificationRequest(user_id=user_id, id_card_url=request.id_card_url)
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("submit verification", e)


@router.delete("/verification", response_model=ResetVerificationResponse)
async def reset_verification(
    reset_verification_use_case: FromDishka[ResetVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResetVerificationResponse:
    """Try again after a rejected verification.

    Raises:
        HTTPException: 401 if not authenticated, 409 if not rejected
    """
    user_id = require_user_id(
        jwt_service.get_user_id_from_token(auth_token), "reset verification"
    )

    try:
        return await reset_verification_use_case.execute(
            ResetVerificationRequest(user_id=user_id)
        )
    except DomainError as e:
        raise domain_http_error(e)
    except Exception as e:
        raise unexpected_http_error("reset verification", e)
