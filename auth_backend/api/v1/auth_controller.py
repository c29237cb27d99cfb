# External package imports
from fastapi import APIRouter, status

# Local application imports
from ...application.dto.auth_dto import (
    AuthResponse,
    ForgotPasswordRequest,
    MessageResponse,
    ResetPasswordRequest,
    UserLoginRequest,
    UserRegistrationRequest,
)
from ...application.use_cases.auth.register_user import RegisterUserUseCase
from ...application.use_cases.auth.login_user import LoginUserUseCase
from ...application.use_cases.auth.forgot_password import ForgotPasswordUseCase
from ...application.use_cases.auth.validate_reset_token import ValidateResetTokenUseCase
from ...application.use_cases.auth.reset_password import ResetPasswordUseCase
from ...core.exceptions import AuthenticationError, INVALID_CREDENTIALS_MESSAGE
from ...di.container import get_container


router = APIRouter(tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(request: UserRegistrationRequest) -> AuthResponse:
    """
    Register a new user

    Args:
        request: User registration request

    Returns:
        AuthResponse with the created user's id and email
    """
    container = get_container()
    register_use_case = container.get(RegisterUserUseCase)

    user = await register_use_case.execute(request)
    return AuthResponse(message="User registered successfully", user=user)


@router.post("/login", response_model=AuthResponse)
async def login_user(request: UserLoginRequest) -> AuthResponse:
    """
    Check a user's email and password

    Args:
        request: User login request

    Returns:
        AuthResponse with the user's id and email
    """
    container = get_container()
    login_use_case = container.get(LoginUserUseCase)

    user = await login_use_case.execute(request)
    if user is None:
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    return AuthResponse(message="Login successful", user=user)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest) -> MessageResponse:
    """Start a password reset; the answer never reveals whether the account exists"""
    container = get_container()
    forgot_password_use_case = container.get(ForgotPasswordUseCase)

    return await forgot_password_use_case.execute(request)


@router.get("/reset-password/{token}", response_model=MessageResponse)
async def validate_reset_token(token: str) -> MessageResponse:
    """Check that a reset token is known and unexpired"""
    container = get_container()
    validate_use_case = container.get(ValidateResetTokenUseCase)

    return await validate_use_case.execute(token)


@router.post("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(token: str, request: ResetPasswordRequest) -> MessageResponse:
    """
    Set a new password using a reset token

    Args:
        token: Reset token from the emailed link
        request: New password

    Returns:
        MessageResponse on success
    """
    container = get_container()
    reset_use_case = container.get(ResetPasswordUseCase)

    return await reset_use_case.execute(token, request)
