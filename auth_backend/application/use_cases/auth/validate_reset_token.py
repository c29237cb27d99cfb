# Local application imports
from ....core.exceptions import AuthenticationError, INVALID_RESET_TOKEN_MESSAGE
from ...dto.auth_dto import MessageResponse
from ...services.reset_token_manager import ResetTokenManager


class ValidateResetTokenUseCase:
    """Use case for checking a reset token without consuming it"""

    def __init__(self, reset_token_manager: ResetTokenManager) -> None:
        self.reset_token_manager = reset_token_manager

    async def execute(self, token: str) -> MessageResponse:
        """
        Raises:
            AuthenticationError: If the token is unknown or expired
        """
        user = await self.reset_token_manager.validate(token)
        if user is None:
            raise AuthenticationError(INVALID_RESET_TOKEN_MESSAGE)
        return MessageResponse(message="Token is valid")
