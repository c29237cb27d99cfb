from datetime import timedelta
from typing import TYPE_CHECKING
from ...core.security import PasswordHasher
from ...domain.repositories.user_repository import UserRepository
from ...domain.gateways.notification_gateway import NotificationGateway
from ...application.services.reset_token_manager import ResetTokenManager
from ...application.use_cases.auth.register_user import RegisterUserUseCase
from ...application.use_cases.auth.login_user import LoginUserUseCase
from ...application.use_cases.auth.forgot_password import ForgotPasswordUseCase
from ...application.use_cases.auth.validate_reset_token import ValidateResetTokenUseCase
from ...application.use_cases.auth.reset_password import ResetPasswordUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Authentication provider - registers the hasher, token manager and auth use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all authentication services and use cases.
        Services are singletons; use cases are created on-demand via factories.
        """
        settings = container.get("settings")

        container.register_singleton(
            PasswordHasher,
            PasswordHasher(rounds=settings.bcrypt_rounds)
        )
        container.register_singleton(
            ResetTokenManager,
            ResetTokenManager(
                user_repository=container.get(UserRepository),
                ttl=timedelta(minutes=settings.reset_token_expire_minutes),
            )
        )

        container.register_factory(
            RegisterUserUseCase,
            lambda: RegisterUserUseCase(
                user_repository=container.get(UserRepository),
                password_hasher=container.get(PasswordHasher),
            )
        )

        container.register_factory(
            LoginUserUseCase,
            lambda: LoginUserUseCase(
                user_repository=container.get(UserRepository),
                password_hasher=container.get(PasswordHasher),
            )
        )

        container.register_factory(
            ForgotPasswordUseCase,
            lambda: ForgotPasswordUseCase(
                user_repository=container.get(UserRepository),
                reset_token_manager=container.get(ResetTokenManager),
                notification_gateway=container.get(NotificationGateway),
            )
        )

        container.register_factory(
            ValidateResetTokenUseCase,
            lambda: ValidateResetTokenUseCase(
                reset_token_manager=container.get(ResetTokenManager),
            )
        )

        container.register_factory(
            ResetPasswordUseCase,
            lambda: ResetPasswordUseCase(
                reset_token_manager=container.get(ResetTokenManager),
                password_hasher=container.get(PasswordHasher),
            )
        )
