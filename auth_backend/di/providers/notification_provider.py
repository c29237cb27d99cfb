from typing import TYPE_CHECKING
from ...domain.gateways.notification_gateway import NotificationGateway
from ...infrastructure.notifications.smtp_email_gateway import SmtpNotificationGateway

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class NotificationProvider:
    """Registers the outbound email gateway"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Build the SMTP gateway eagerly so missing mail settings surface as a
        ConfigurationError while the container is being set up.
        """
        container.register_singleton(
            NotificationGateway,
            SmtpNotificationGateway(settings=container.get("settings"))
        )
