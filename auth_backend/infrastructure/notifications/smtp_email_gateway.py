"""
SMTP notification gateway (async).
==================================

Sends password reset links by email. Settings are checked when the gateway is
built, so a process without SMTP or FRONTEND_URL configuration fails at
startup instead of sending malformed emails later.
"""
import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from ...core.config import Settings
from ...core.exceptions import ConfigurationError, TransportError
from ...domain.gateways.notification_gateway import NotificationGateway

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Password Reset Request"


def build_reset_url(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/reset-password/{token}"


def _build_html_body(reset_url: str, expire_minutes: int) -> str:
    """Build the HTML body for a reset email."""
    safe_url = html.escape(reset_url, quote=True)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Password Reset</title>
</head>
<body style="font-family:Segoe UI,Helvetica,Arial,sans-serif;background:#f5f5f5;margin:0;padding:24px;">
  <div style="max-width:600px;margin:0 auto;background:#fff;border-radius:8px;box-shadow:0 2px 8px rgba(0,0,0,0.08);overflow:hidden;">
    <div style="padding:24px;">
      <h1 style="margin:0 0 16px;font-size:20px;font-weight:600;text-align:center;">Password Reset Request</h1>
      <p>Hello,</p>
      <p>You are receiving this email because a password reset request for your account was received.</p>
      <p>Please click the button below to reset your password. This link will expire in {_format_duration(expire_minutes)}.</p>
      <p style="text-align:center;margin:24px 0;">
        <a href="{safe_url}" target="_blank" rel="noopener noreferrer"
           style="background:#1a237e;color:#fff;padding:12px 24px;border-radius:6px;text-decoration:none;">Reset Password</a>
      </p>
      <p>If you did not request a password reset, please ignore this email or contact support.</p>
      <hr style="border:none;border-top:1px solid #eee;">
      <p style="font-size:12px;color:#888;">If the button above does not work, copy and paste the following link into your browser:</p>
      <p style="font-size:12px;word-break:break-all;"><a href="{safe_url}">{safe_url}</a></p>
    </div>
  </div>
</body>
</html>
"""


def _build_text_body(reset_url: str, expire_minutes: int) -> str:
    return (
        "Hello,\n\n"
        "You are receiving this email because a password reset request for your account was received.\n\n"
        f"Open the following link to reset your password. It will expire in {_format_duration(expire_minutes)}.\n\n"
        f"{reset_url}\n\n"
        "If you did not request a password reset, please ignore this email or contact support.\n"
    )


def _format_duration(minutes: int) -> str:
    if minutes % 60 == 0:
        hours = minutes // 60
        return "1 hour" if hours == 1 else f"{hours} hours"
    return "1 minute" if minutes == 1 else f"{minutes} minutes"


class SmtpNotificationGateway(NotificationGateway):
    """Delivers reset links over SMTP with aiosmtplib"""

    def __init__(self, settings: Settings) -> None:
        missing = settings.missing_smtp_settings()
        if missing:
            raise ConfigurationError(
                f"Email delivery is not configured; missing: {', '.join(missing)}"
            )
        self.settings = settings

    def build_message(self, email: str, token: str) -> MIMEMultipart:
        """
        Compose the reset email

        Args:
            email: Recipient address
            token: Reset token embedded in the link

        Returns:
            multipart/alternative message with text and HTML parts
        """
        settings = self.settings
        reset_url = build_reset_url(settings.frontend_url, token)

        msg = MIMEMultipart("alternative")
        msg["Subject"] = RESET_EMAIL_SUBJECT
        msg["From"] = f'"{settings.email_from_name}" <{settings.email_from}>'
        msg["To"] = email
        msg.attach(MIMEText(_build_text_body(reset_url, settings.reset_token_expire_minutes), "plain", "utf-8"))
        msg.attach(MIMEText(_build_html_body(reset_url, settings.reset_token_expire_minutes), "html", "utf-8"))
        return msg

    async def send_reset_email(self, email: str, token: str) -> None:
        settings = self.settings
        msg = self.build_message(email, token)

        try:
            await aiosmtplib.send(
                msg,
                sender=settings.email_from,
                recipients=[email],
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_user,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
                timeout=settings.smtp_timeout_seconds,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send password reset email to %s: %s", email, e)
            raise TransportError(f"Failed to send password reset email: {e}") from e

        logger.info("Password reset email sent to %s", email)
