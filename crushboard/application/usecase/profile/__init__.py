"""Profile use cases."""

from .common import ProfileItem
from .reset_verification import (
    ResetVerificationRequest,
    ResetVerificationResponse,
    ResetVerificationUseCase,
)
from .submit_verification import (
    SubmitVerificationRequest,
    SubmitVerificationResponse,
    SubmitVerificationUseCase,
)

__all__ = [
    "ProfileItem",
    "ResetVerificationRequest",
    "ResetVerificationResponse",
    "ResetVerificationUseCase",
    "SubmitVerificationRequest",
    "SubmitVerificationResponse",
    "SubmitVerificationUseCase",
]
