from abc import ABC, abstractmethod


class NotificationGateway(ABC):
    """Out-of-band delivery of password reset links"""

    @abstractmethod
    async def send_reset_email(self, email: str, token: str) -> None:
        """
        Deliver a reset link for token to email

        Raises:
            TransportError: If the message could not be sent
        """
        pass
