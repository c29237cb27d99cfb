from .notification_gateway import NotificationGateway

__all__ = ["NotificationGateway"]
