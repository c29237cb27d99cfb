# Standard library imports
import logging

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.gateways.notification_gateway import NotificationGateway
from ....utils.datetime_utils import to_iso
from ...dto.auth_dto import ForgotPasswordRequest, MessageResponse
from ...services.reset_token_manager import ResetTokenManager

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "Password reset email sent if account exists"


class ForgotPasswordUseCase:
    """Use case for starting the password reset flow"""

    def __init__(
        self,
        user_repository: UserRepository,
        reset_token_manager: ResetTokenManager,
        notification_gateway: NotificationGateway,
    ) -> None:
        self.user_repository = user_repository
        self.reset_token_manager = reset_token_manager
        self.notification_gateway = notification_gateway

    async def execute(self, request: ForgotPasswordRequest) -> MessageResponse:
        """
        Issue a reset token and email it to the account owner

        The response is the same whether or not the account exists.

        Raises:
            RepositoryError: If the token could not be stored (no email is sent)
            TransportError: If the email could not be delivered
        """
        user = await self.user_repository.find_by_email(request.email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)

        token, expiry = await self.reset_token_manager.issue(user)
        logger.info("Reset token issued for user %s, expires %s", user.id, to_iso(expiry))

        await self.notification_gateway.send_reset_email(user.email, token)

        return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)
