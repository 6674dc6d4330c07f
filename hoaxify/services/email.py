"""Outgoing e-mail over SMTP."""

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path

from fastapi.templating import Jinja2Templates

from hoaxify.config import get_settings

logger = logging.getLogger("hoaxify")

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates" / "email"))


class EmailDeliveryError(RuntimeError):
    """The SMTP server could not be reached or refused the message."""


class EmailService:
    """Renders and sends account e-mails."""

    def __init__(self) -> None:
        settings = get_settings()
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.sender = settings.MAIL_FROM
        self.frontend_url = settings.FRONTEND_URL.rstrip("/")

    def send_account_activation(self, email: str, token: str) -> None:
        html = templates.get_template("account_activation.html").render(frontend_url=self.frontend_url, token=token)
        self._send(email, "Account activation", html)

    def send_password_reset(self, email: str, token: str) -> None:
        html = templates.get_template("password_reset.html").render(frontend_url=self.frontend_url, token=token)
        self._send(email, "Password reset", html)

    def _send(self, to: str, subject: str, html: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send '%s' e-mail to %s: %s", subject, to, e)
            raise EmailDeliveryError(str(e)) from e

        logger.info("Sent '%s' e-mail to %s", subject, to)


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get singleton e-mail service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
