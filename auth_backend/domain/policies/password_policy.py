"""
Password Policy shared by registration and password reset.
"""
import re

from ...core.exceptions import ValidationError


MIN_PASSWORD_LENGTH = 8

PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters long, include uppercase, "
    "lowercase, number, and special character"
)

_REQUIRED_PATTERNS = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


def is_strong_password(password: object) -> bool:
    """Return True if password satisfies every policy requirement."""
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(pattern.search(password) for pattern in _REQUIRED_PATTERNS)


def validate_password_policy(password: object) -> str:
    """
    Check a candidate password against the policy

    Args:
        password: Candidate plain text password

    Returns:
        The password unchanged when it complies

    Raises:
        ValidationError: Listing all requirements if any one is violated
    """
    if not is_strong_password(password):
        raise ValidationError(PASSWORD_POLICY_MESSAGE)
    return password
