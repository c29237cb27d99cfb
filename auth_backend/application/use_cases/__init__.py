from .auth import (
    RegisterUserUseCase,
    LoginUserUseCase,
    ForgotPasswordUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
)

__all__ = [
    "RegisterUserUseCase",
    "LoginUserUseCase",
    "ForgotPasswordUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
]
