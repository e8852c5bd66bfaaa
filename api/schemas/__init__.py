"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import ProgressResponse, LessonResponse
    from api.schemas.progress_schemas import ProgressResponse
"""

from api.schemas.user_schemas import CamelModel, UserPublic
from api.schemas.auth_schemas import (
    AuthTokenPayload,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from api.schemas.content_schemas import (
    DailyWordResponse,
    FlashcardDeckResponse,
    FlashcardResponse,
    LessonResponse,
)
from api.schemas.progress_schemas import (
    ProgressResponse,
    UpdateLastLearningRequest,
    UpdateLastLearningResponse,
)

__all__ = [
    # user
    "CamelModel",
    "UserPublic",
    # auth
    "AuthTokenPayload",
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ResetPasswordRequest",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    # content
    "DailyWordResponse",
    "FlashcardDeckResponse",
    "FlashcardResponse",
    "LessonResponse",
    # progress
    "ProgressResponse",
    "UpdateLastLearningRequest",
    "UpdateLastLearningResponse",
]
