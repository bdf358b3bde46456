"""Authentication use cases."""

from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .sign_in_anonymously import (
    SignInAnonymouslyRequest,
    SignInAnonymouslyResponse,
    SignInAnonymouslyUseCase,
)

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "SignInAnonymouslyRequest",
    "SignInAnonymouslyResponse",
    "SignInAnonymouslyUseCase",
]
