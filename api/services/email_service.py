"""
Outbound email delivery.

Sends through SMTP when SMTP_HOST is configured; otherwise the message is
logged so local development works without a mail server.
"""

import smtplib
from email.message import EmailMessage
from typing import Optional

from api.config import settings
from api.utils.logger import configure_logging

logger = configure_logging()


class EmailSender:
    """Infrastructure service for sending account emails."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "no-reply@lingua.local",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender

    def send(self, to_email: str, subject: str, body: str) -> bool:
        """Send a plain-text email. Returns False when delivery failed."""
        if not self.host:
            logger.info("email (smtp disabled) to=%s subject=%s\n%s", to_email, subject, body)
            return True

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_email
        message["Subject"] = subject
        message.set_content(body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError):
            logger.exception("email delivery failed to=%s subject=%s", to_email, subject)
            return False
        logger.info("email sent to=%s subject=%s", to_email, subject)
        return True

    def send_verification_code(self, to_email: str, username: str, code: str) -> bool:
        return self.send(
            to_email,
            "Verify your email",
            f"Hallo {username},\n\nyour verification code is {code}.\n"
            f"It expires in {settings.verification_code_ttl_minutes} minutes.",
        )

    def send_reset_code(self, to_email: str, code: str) -> bool:
        return self.send(
            to_email,
            "Reset your password",
            f"Your password reset code is {code}.\n"
            f"It expires in {settings.reset_code_ttl_minutes} minutes. "
            "If you did not ask for this, ignore this email.",
        )


def get_email_sender() -> EmailSender:
    return EmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        sender=settings.smtp_sender,
    )
