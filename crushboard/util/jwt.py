"""Session tokens for anonymous users.

Tokens are HS256 JWTs whose ``sub`` claim is the anonymous user ID. They
carry no other identity: the profile is looked up on every request.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, Field

from crushboard.config import AuthSettings


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    user_id: str = Field(alias="sub", min_length=1)
    issued_at: datetime = Field(alias="iat")
    expires_at: datetime = Field(alias="exp")


class JWTError(Exception):
    """Session token is missing claims, tampered with or expired."""

    pass


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Issue a session token for an anonymous user.

    Args:
        user_id: Anonymous user ID
        settings: Authentication settings (secret, algorithm, lifetime)

    Returns:
        Encoded token
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check a session token's signature and expiry.

    Raises:
        JWTError: If the token is expired, malformed or lacks a subject
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Session has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid session token: {e}") from e

    return TokenPayload.model_validate(claims)
