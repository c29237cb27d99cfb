"""
Exception hierarchy for the authentication backend.

Use cases raise these; the API layer translates them to HTTP responses in a
single place (see api/error_handlers.py). Every exception carries a
user-facing message that is safe to return to the caller, separate from the
internal message that is only logged.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


GENERIC_ERROR_MESSAGE = "Internal Server Error"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_RESET_TOKEN_MESSAGE = "Invalid or expired token"
DUPLICATE_EMAIL_MESSAGE = "Email already exists"


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class AuthServiceError(Exception):
    """Base exception for all authentication backend errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or GENERIC_ERROR_MESSAGE
        self.details = details or {}


# -----------------------------------------------------------------------------
# Client errors (400)
# -----------------------------------------------------------------------------


class ValidationError(AuthServiceError):
    """Raised when request input is malformed or missing."""

    status_code = 400

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)


class DuplicateEmailError(AuthServiceError):
    """Raised when a normalized email is already registered."""

    status_code = 400

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            "User with this email already exists",
            user_message=DUPLICATE_EMAIL_MESSAGE,
        )
        self.email = email


class AuthenticationError(AuthServiceError):
    """
    Raised for bad credentials or an invalid/expired reset token.

    The user message does not say which part of the check failed.
    """

    status_code = 400

    def __init__(self, user_message: str = INVALID_CREDENTIALS_MESSAGE, **kwargs):
        super().__init__(user_message, user_message=user_message, **kwargs)


# -----------------------------------------------------------------------------
# Server errors (500)
# -----------------------------------------------------------------------------


class ConfigurationError(AuthServiceError):
    """Raised when required settings (e.g. SMTP) are missing."""

    status_code = 500


class TransportError(AuthServiceError):
    """Raised when an outbound email cannot be delivered."""

    status_code = 500

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", "Failed to send password reset email")
        super().__init__(message, **kwargs)


class RepositoryError(AuthServiceError):
    """Raised when the credential store fails unexpectedly."""

    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at the API boundary so internal details are never exposed.
    """
    if isinstance(exc, AuthServiceError) and getattr(exc, "user_message", None):
        return exc.user_message
    return GENERIC_ERROR_MESSAGE


def get_status_code(exc: BaseException) -> int:
    """Return the HTTP status code for an exception (500 when unknown)."""
    if isinstance(exc, AuthServiceError):
        return exc.status_code
    return 500
