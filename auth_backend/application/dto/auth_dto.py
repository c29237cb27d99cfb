from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ...domain.models.user import normalize_email
from .user_dto import UserResponse


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class UserRegistrationRequest(BaseModel):
    """DTO for user registration request"""
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName", min_length=2)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class UserLoginRequest(BaseModel):
    """DTO for user login request; only presence is checked here"""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)


class ForgotPasswordRequest(BaseModel):
    """DTO for a password reset request"""
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class ResetPasswordRequest(BaseModel):
    """DTO for setting a new password with a reset token"""
    password: str = Field(min_length=1)


class MessageResponse(BaseModel):
    """DTO for responses that only carry a status message"""
    success: bool = True
    message: str


class AuthResponse(MessageResponse):
    """DTO for register/login responses"""
    user: UserResponse
