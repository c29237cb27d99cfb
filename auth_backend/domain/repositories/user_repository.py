from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from ..models.user import User


class UserRepository(ABC):
    """Repository interface - defines contract for user data access"""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Insert a new user

        Raises:
            DuplicateEmailError: If the normalized email is already taken
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by (normalized) email address"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def find_by_valid_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """Find the user holding this reset token with an expiry after now"""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user; absent reset fields are removed from the record"""
        pass

    @abstractmethod
    async def set_reset_token(self, user_id: str, token: str, expiry: datetime) -> bool:
        """Atomically store a reset token and its expiry; False if the user is gone"""
        pass

    @abstractmethod
    async def apply_password_reset(
        self,
        user_id: str,
        token: str,
        hashed_password: str,
        now: datetime,
    ) -> Optional[User]:
        """
        Set a new password hash and clear the reset fields in one write

        Only applies while the stored token still equals token and has not
        expired at now. Returns the updated user, or None if the guard failed.
        """
        pass
