"""
Unit tests for auth use cases (Register, Login, ForgotPassword,
ValidateResetToken, ResetPassword).
"""
from unittest.mock import AsyncMock

import pytest
from auth_backend.application.dto.auth_dto import (
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserLoginRequest,
    UserRegistrationRequest,
)
from auth_backend.application.services.reset_token_manager import ResetTokenManager
from auth_backend.application.use_cases.auth.forgot_password import (
    FORGOT_PASSWORD_MESSAGE,
    ForgotPasswordUseCase,
)
from auth_backend.application.use_cases.auth.login_user import LoginUserUseCase
from auth_backend.application.use_cases.auth.register_user import RegisterUserUseCase
from auth_backend.application.use_cases.auth.reset_password import ResetPasswordUseCase
from auth_backend.application.use_cases.auth.validate_reset_token import ValidateResetTokenUseCase
from auth_backend.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    RepositoryError,
    TransportError,
    ValidationError,
)
from auth_backend.domain.models.user import User


class TestRegisterUserUseCase:
    """Tests for RegisterUserUseCase"""

    @pytest.mark.asyncio
    async def test_register_success(self, mock_user_repo, password_hasher):
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.create.side_effect = lambda user: User(
            id="usr-new",
            full_name=user.full_name,
            email=user.email,
            hashed_password=user.hashed_password,
        )

        use_case = RegisterUserUseCase(mock_user_repo, password_hasher)
        result = await use_case.execute(
            UserRegistrationRequest(full_name="New User", email="New@Example.com", password="Str0ng!Pass")
        )

        assert result.id == "usr-new"
        assert result.email == "new@example.com"
        mock_user_repo.create.assert_called_once()
        created = mock_user_repo.create.call_args.args[0]
        assert created.hashed_password != "Str0ng!Pass"
        assert password_hasher.verify("Str0ng!Pass", created.hashed_password)

    @pytest.mark.asyncio
    async def test_register_duplicate_email_raises(self, mock_user_repo, password_hasher, make_user):
        mock_user_repo.find_by_email.return_value = make_user(email="existing@example.com", user_id="usr-1")

        use_case = RegisterUserUseCase(mock_user_repo, password_hasher)
        with pytest.raises(DuplicateEmailError):
            await use_case.execute(
                UserRegistrationRequest(full_name="Duplicate", email="existing@example.com", password="Str0ng!Pass")
            )
        mock_user_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_race_lost_at_store_raises(self, mock_user_repo, password_hasher):
        mock_user_repo.find_by_email.return_value = None
        mock_user_repo.create.side_effect = DuplicateEmailError("racer@example.com")

        use_case = RegisterUserUseCase(mock_user_repo, password_hasher)
        with pytest.raises(DuplicateEmailError):
            await use_case.execute(
                UserRegistrationRequest(full_name="Racer", email="racer@example.com", password="Str0ng!Pass")
            )

    @pytest.mark.asyncio
    async def test_register_weak_password_rejected_before_storage(self, mock_user_repo, password_hasher):
        use_case = RegisterUserUseCase(mock_user_repo, password_hasher)
        with pytest.raises(ValidationError):
            await use_case.execute(
                UserRegistrationRequest(full_name="Weak", email="weak@example.com", password="password")
            )
        mock_user_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_case_variant_email_is_duplicate(self, user_repo, password_hasher):
        use_case = RegisterUserUseCase(user_repo, password_hasher)
        await use_case.execute(
            UserRegistrationRequest(full_name="First", email="A@x.com", password="Str0ng!Pass")
        )
        with pytest.raises(DuplicateEmailError):
            await use_case.execute(
                UserRegistrationRequest(full_name="Second", email="a@x.com", password="Str0ng!Pass")
            )


class TestLoginUserUseCase:
    """Tests for LoginUserUseCase"""

    @pytest.mark.asyncio
    async def test_login_success(self, mock_user_repo, password_hasher, make_user):
        mock_user_repo.find_by_email.return_value = make_user(email="test@example.com", user_id="usr-123")

        use_case = LoginUserUseCase(mock_user_repo, password_hasher)
        result = await use_case.execute(UserLoginRequest(email="test@example.com", password="Str0ng!Pass"))

        assert result is not None
        assert result.id == "usr-123"
        assert result.email == "test@example.com"

    @pytest.mark.asyncio
    async def test_login_user_not_found(self, mock_user_repo, password_hasher):
        mock_user_repo.find_by_email.return_value = None
        use_case = LoginUserUseCase(mock_user_repo, password_hasher)
        result = await use_case.execute(UserLoginRequest(email="unknown@example.com", password="anypass123"))
        assert result is None

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, mock_user_repo, password_hasher, make_user):
        mock_user_repo.find_by_email.return_value = make_user(email="test@example.com", user_id="usr-1")

        use_case = LoginUserUseCase(mock_user_repo, password_hasher)
        result = await use_case.execute(UserLoginRequest(email="test@example.com", password="wrongpassword"))
        assert result is None

    @pytest.mark.asyncio
    async def test_login_matches_email_case_insensitively(self, user_repo, password_hasher, make_user):
        await user_repo.create(make_user(email="jane@test.com"))

        use_case = LoginUserUseCase(user_repo, password_hasher)
        result = await use_case.execute(UserLoginRequest(email=" jane@TEST.com ", password="Str0ng!Pass"))
        assert result is not None
        assert result.email == "jane@test.com"


class TestForgotPasswordUseCase:
    """Tests for ForgotPasswordUseCase"""

    @pytest.mark.asyncio
    async def test_known_email_issues_token_and_sends(self, user_repo, token_manager, gateway, make_user):
        user = await user_repo.create(make_user())

        use_case = ForgotPasswordUseCase(user_repo, token_manager, gateway)
        result = await use_case.execute(ForgotPasswordRequest(email="Jane@Test.com"))

        assert result.success is True
        assert result.message == FORGOT_PASSWORD_MESSAGE
        assert len(gateway.sent) == 1
        email, token = gateway.sent[0]
        assert email == "jane@test.com"
        assert (await user_repo.find_by_id(user.id)).reset_token == token

    @pytest.mark.asyncio
    async def test_unknown_email_returns_same_response_without_sending(self, user_repo, token_manager, gateway):
        use_case = ForgotPasswordUseCase(user_repo, token_manager, gateway)
        result = await use_case.execute(ForgotPasswordRequest(email="nobody@test.com"))

        assert result.success is True
        assert result.message == FORGOT_PASSWORD_MESSAGE
        assert gateway.sent == []

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(self, user_repo, token_manager, gateway, make_user):
        await user_repo.create(make_user())
        gateway.fail = True

        use_case = ForgotPasswordUseCase(user_repo, token_manager, gateway)
        with pytest.raises(TransportError):
            await use_case.execute(ForgotPasswordRequest(email="jane@test.com"))

    @pytest.mark.asyncio
    async def test_no_email_when_token_not_persisted(self, make_user, gateway):
        repo = AsyncMock()
        repo.find_by_email.return_value = make_user(user_id="usr-1")
        repo.set_reset_token.side_effect = RepositoryError("write failed")

        use_case = ForgotPasswordUseCase(repo, ResetTokenManager(repo), gateway)
        with pytest.raises(RepositoryError):
            await use_case.execute(ForgotPasswordRequest(email="jane@test.com"))
        assert gateway.sent == []


class TestValidateResetTokenUseCase:

    @pytest.mark.asyncio
    async def test_valid_token(self, user_repo, token_manager, make_user):
        user = await user_repo.create(make_user())
        token, _ = await token_manager.issue(user)

        result = await ValidateResetTokenUseCase(token_manager).execute(token)
        assert result.success is True
        assert result.message == "Token is valid"

    @pytest.mark.asyncio
    async def test_invalid_token_raises(self, token_manager):
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            await ValidateResetTokenUseCase(token_manager).execute("deadbeef")

    @pytest.mark.asyncio
    async def test_validation_does_not_consume(self, user_repo, token_manager, make_user):
        user = await user_repo.create(make_user())
        token, _ = await token_manager.issue(user)

        use_case = ValidateResetTokenUseCase(token_manager)
        await use_case.execute(token)
        await use_case.execute(token)
        assert (await user_repo.find_by_id(user.id)).reset_token == token


class TestResetPasswordUseCase:

    @pytest.mark.asyncio
    async def test_reset_success(self, user_repo, token_manager, password_hasher, make_user):
        user = await user_repo.create(make_user())
        token, _ = await token_manager.issue(user)

        use_case = ResetPasswordUseCase(token_manager, password_hasher)
        result = await use_case.execute(token, ResetPasswordRequest(password="NewStr0ng!1"))

        assert result.message == "Password has been reset successfully"
        stored = await user_repo.find_by_id(user.id)
        assert password_hasher.verify("NewStr0ng!1", stored.hashed_password)
        assert not password_hasher.verify("Str0ng!Pass", stored.hashed_password)
        assert stored.reset_token is None
        assert stored.reset_expiry is None

    @pytest.mark.asyncio
    async def test_token_reuse_rejected(self, user_repo, token_manager, password_hasher, make_user):
        user = await user_repo.create(make_user())
        token, _ = await token_manager.issue(user)

        use_case = ResetPasswordUseCase(token_manager, password_hasher)
        await use_case.execute(token, ResetPasswordRequest(password="NewStr0ng!1"))
        with pytest.raises(AuthenticationError):
            await use_case.execute(token, ResetPasswordRequest(password="Another0ne!"))

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, user_repo, token_manager, password_hasher, clock, make_user):
        user = await user_repo.create(make_user())
        token, _ = await token_manager.issue(user)
        clock.advance(minutes=61)

        use_case = ResetPasswordUseCase(token_manager, password_hasher)
        with pytest.raises(AuthenticationError):
            await use_case.execute(token, ResetPasswordRequest(password="NewStr0ng!1"))

    @pytest.mark.asyncio
    async def test_weak_password_rejected_before_token_lookup(self, password_hasher):
        manager = AsyncMock()
        use_case = ResetPasswordUseCase(manager, password_hasher)
        with pytest.raises(ValidationError):
            await use_case.execute("any-token", ResetPasswordRequest(password="weakpass"))
        manager.validate.assert_not_called()
