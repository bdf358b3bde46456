"""Session token domain service."""

import logfire

from crushboard.config import AuthSettings
from crushboard.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and reads the session tokens of anonymous users."""

    span_prefix = "jwt_service"

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        """Issue a session token for ``user_id``."""
        with self.span("create_token", user_id=user_id):
            return create_token(user_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        with self.span("verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token rejected", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Resolve the caller of a request.

        Routes that serve signed-out visitors too use this: a missing,
        expired or forged token simply means nobody is signed in.

        Args:
            token: Session cookie value, if any

        Returns:
            User ID, or None when there is no valid session
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
