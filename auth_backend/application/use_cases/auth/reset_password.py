# Standard library imports
import logging

# Local application imports
from ....core.exceptions import AuthenticationError, INVALID_RESET_TOKEN_MESSAGE
from ....core.security import PasswordHasher
from ....domain.policies.password_policy import validate_password_policy
from ...dto.auth_dto import ResetPasswordRequest, MessageResponse
from ...services.reset_token_manager import ResetTokenManager

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """Use case for setting a new password with a reset token"""

    def __init__(
        self,
        reset_token_manager: ResetTokenManager,
        password_hasher: PasswordHasher,
    ) -> None:
        self.reset_token_manager = reset_token_manager
        self.password_hasher = password_hasher

    async def execute(self, token: str, request: ResetPasswordRequest) -> MessageResponse:
        """
        Reset a user's password

        Args:
            token: Reset token from the emailed link
            request: New password

        Returns:
            MessageResponse on success

        Raises:
            ValidationError: If the new password does not satisfy the policy
            AuthenticationError: If the token is invalid, expired or already used
        """
        validate_password_policy(request.password)

        user = await self.reset_token_manager.validate(token)
        if user is None:
            raise AuthenticationError(INVALID_RESET_TOKEN_MESSAGE)

        user.hashed_password = self.password_hasher.hash(request.password)
        await self.reset_token_manager.consume(user)
        logger.info("Password reset completed for user %s", user.id)

        return MessageResponse(message="Password has been reset successfully")
