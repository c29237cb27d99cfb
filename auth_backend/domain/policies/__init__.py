from .password_policy import (
    PASSWORD_POLICY_MESSAGE,
    is_strong_password,
    validate_password_policy,
)

__all__ = ["PASSWORD_POLICY_MESSAGE", "is_strong_password", "validate_password_policy"]
