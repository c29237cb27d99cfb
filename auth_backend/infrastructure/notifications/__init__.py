from .smtp_email_gateway import SmtpNotificationGateway

__all__ = ["SmtpNotificationGateway"]
