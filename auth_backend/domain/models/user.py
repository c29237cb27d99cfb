from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address; this form is the uniqueness key."""
    return (email or "").strip().lower()


@dataclass
class User:
    """Pure domain model for User entity - no external dependencies"""
    id: Optional[str]
    full_name: str
    email: str
    hashed_password: str
    reset_token: Optional[str] = None
    reset_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Business validations"""
        self.full_name = (self.full_name or "").strip()
        self.email = normalize_email(self.email)
        if len(self.full_name) < 2:
            raise ValueError("Full name must be at least 2 characters")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if not self.hashed_password:
            raise ValueError("Password hash is required")
        if (self.reset_token is None) != (self.reset_expiry is None):
            raise ValueError("Reset token and expiry must be set together")
