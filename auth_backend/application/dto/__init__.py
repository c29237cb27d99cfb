from .auth_dto import (
    UserRegistrationRequest,
    UserLoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    AuthResponse,
)
from .user_dto import UserResponse

__all__ = [
    "UserRegistrationRequest",
    "UserLoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "MessageResponse",
    "AuthResponse",
    "UserResponse",
]
