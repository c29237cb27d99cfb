"""
Shared pytest fixtures for auth_backend tests.
"""
import os
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, patch

import pytest

from auth_backend.application.services.reset_token_manager import ResetTokenManager
from auth_backend.application.use_cases.auth.forgot_password import ForgotPasswordUseCase
from auth_backend.application.use_cases.auth.login_user import LoginUserUseCase
from auth_backend.application.use_cases.auth.register_user import RegisterUserUseCase
from auth_backend.application.use_cases.auth.reset_password import ResetPasswordUseCase
from auth_backend.application.use_cases.auth.validate_reset_token import ValidateResetTokenUseCase
from auth_backend.core.config import Settings
from auth_backend.core.exceptions import DuplicateEmailError, TransportError
from auth_backend.core.security import PasswordHasher
from auth_backend.di.base_container import BaseContainer
from auth_backend.domain.gateways.notification_gateway import NotificationGateway
from auth_backend.domain.models.user import User, normalize_email
from auth_backend.domain.repositories.user_repository import UserRepository


TEST_ENV = {
    "MONGO_URI": "mongodb://localhost:27017",
    "MONGO_DB_NAME": "test_auth_db",
    "BCRYPT_ROUNDS": "4",
    "RESET_TOKEN_EXPIRE_MINUTES": "60",
    "SMTP_HOST": "smtp.test.local",
    "SMTP_PORT": "587",
    "SMTP_USER": "mailer@example.com",
    "SMTP_PASSWORD": "smtp-secret",
    "FRONTEND_URL": "https://app.example.com/",
}


class FakeClock:
    """Controllable UTC clock"""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.current = start or datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository with the same uniqueness and guard semantics as Mongo"""

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}

    def _email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        return any(u.email == email and u.id != exclude_id for u in self.users.values())

    async def create(self, user: User) -> User:
        email = normalize_email(user.email)
        if self._email_taken(email):
            raise DuplicateEmailError(email)
        now = datetime.now(timezone.utc)
        stored = replace(user, id=uuid.uuid4().hex[:24], email=email, created_at=now, updated_at=now)
        self.users[stored.id] = stored
        return replace(stored)

    async def find_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        for user in self.users.values():
            if user.email == normalized:
                return replace(user)
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.users.get(user_id)
        return replace(user) if user else None

    async def find_by_valid_reset_token(self, token: str, now: datetime) -> Optional[User]:
        for user in self.users.values():
            if token and user.reset_token == token and user.reset_expiry > now:
                return replace(user)
        return None

    async def save(self, user: User) -> User:
        if user.id not in self.users:
            raise ValueError(f"User with ID {user.id} not found")
        if self._email_taken(user.email, exclude_id=user.id):
            raise DuplicateEmailError(user.email)
        stored = replace(user, updated_at=datetime.now(timezone.utc))
        self.users[user.id] = stored
        return replace(stored)

    async def set_reset_token(self, user_id: str, token: str, expiry: datetime) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], reset_token=token, reset_expiry=expiry)
        return True

    async def apply_password_reset(
        self,
        user_id: str,
        token: str,
        hashed_password: str,
        now: datetime,
    ) -> Optional[User]:
        user = self.users.get(user_id)
        if user is None or user.reset_token != token or not user.reset_expiry or user.reset_expiry <= now:
            return None
        stored = replace(
            user,
            hashed_password=hashed_password,
            reset_token=None,
            reset_expiry=None,
            updated_at=datetime.now(timezone.utc),
        )
        self.users[user_id] = stored
        return replace(stored)


class RecordingGateway(NotificationGateway):
    """Keeps sent reset emails in memory; can be told to fail"""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []
        self.fail = False

    async def send_reset_email(self, email: str, token: str) -> None:
        if self.fail:
            raise TransportError("SMTP server unavailable")
        self.sent.append((email, token))

    @property
    def last_token(self) -> Optional[str]:
        return self.sent[-1][1] if self.sent else None


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    with patch.dict(os.environ, TEST_ENV, clear=False):
        yield TEST_ENV


@pytest.fixture
def settings(mock_env):
    """Real Settings built from the test environment."""
    return Settings()


@pytest.fixture
def password_hasher():
    """Cheap work factor so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository with async methods."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def token_manager(user_repo, clock):
    return ResetTokenManager(user_repo, ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def make_user(password_hasher):
    """Factory for User entities with a real bcrypt hash."""
    def _make_user(
        email: str = "jane@test.com",
        password: str = "Str0ng!Pass",
        full_name: str = "Jane Doe",
        user_id: Optional[str] = None,
    ) -> User:
        return User(
            id=user_id,
            full_name=full_name,
            email=email,
            hashed_password=password_hasher.hash(password),
        )
    return _make_user


@pytest.fixture
def in_memory_container(user_repo, gateway, token_manager, password_hasher):
    """Container wired like DIContainer but on in-memory collaborators."""
    container = BaseContainer()
    container.register_factory(
        RegisterUserUseCase,
        lambda: RegisterUserUseCase(user_repository=user_repo, password_hasher=password_hasher),
    )
    container.register_factory(
        LoginUserUseCase,
        lambda: LoginUserUseCase(user_repository=user_repo, password_hasher=password_hasher),
    )
    container.register_factory(
        ForgotPasswordUseCase,
        lambda: ForgotPasswordUseCase(
            user_repository=user_repo,
            reset_token_manager=token_manager,
            notification_gateway=gateway,
        ),
    )
    container.register_factory(
        ValidateResetTokenUseCase,
        lambda: ValidateResetTokenUseCase(reset_token_manager=token_manager),
    )
    container.register_factory(
        ResetPasswordUseCase,
        lambda: ResetPasswordUseCase(reset_token_manager=token_manager, password_hasher=password_hasher),
    )
    return container
