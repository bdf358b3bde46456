"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from pydantic import BaseModel

from crushboard.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    SignInAnonymouslyRequest,
    SignInAnonymouslyUseCase,
)
from crushboard.application.usecase.profile import ProfileItem
from crushboard.config import Settings
from crushboard.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)

AUTH_COOKIE = "auth_token"


class AuthStatusResponse(BaseModel):
    """Authentication status response."""

    authenticated: bool
    profile: ProfileItem | None = None


@router.post(
    "/anonymous",
    response_model=AuthStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_in_anonymously(
    response: Response,
    sign_in_use_case: FromDishka[SignInAnonymouslyUseCase],
    settings: FromDishka[Settings],
) -> AuthStatusResponse:
    """Start an anonymous session.

    Creates a new anonymous user with the default, unverified profile and
    stores its JWT in an HTTP-only cookie.

    Args:
        response: Response used to set the cookie
        sign_in_use_case: Anonymous sign-in use case from DI
        settings: Application settings

    Returns:
        The new user's profile
    """
    result = await sign_in_use_case.execute(SignInAnonymouslyRequest())

    response.set_cookie(
        key=AUTH_COOKIE,
        value=result.token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
    logger.info(f"Anonymous session started for user {result.profile.user_id}")

    return AuthStatusResponse(authenticated=True, profile=result.profile)


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without a session: it returns authenticated=false instead
    of raising an error.

    Args:
        get_current_user_use_case: Get current user use case from DI
        auth_token: JWT token from cookie (optional)

    Returns:
        Authentication status with the profile if authenticated
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        result = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, profile=result.profile)
    except JWTError as e:
        logger.info(f"Rejected session token: {e}")
        return AuthStatusResponse(authenticated=False)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    """Drop the session cookie.

    The anonymous user cannot sign back in to the same account afterwards.
    """
    response.delete_cookie(key=AUTH_COOKIE, path="/")


def require_user_id(user_id: str | None, action: str) -> str:
    """Reject requests without a valid session.

    Raises:
        HTTPException: 401 if there is no signed-in user
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id
