from .register_user import RegisterUserUseCase
from .login_user import LoginUserUseCase
from .forgot_password import ForgotPasswordUseCase
from .validate_reset_token import ValidateResetTokenUseCase
from .reset_password import ResetPasswordUseCase

__all__ = [
    "RegisterUserUseCase",
    "LoginUserUseCase",
    "ForgotPasswordUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
]
