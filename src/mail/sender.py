"""Welcome email delivery over SMTP.

Delivery failures are raised to the caller as ``EmailDeliveryError`` so the
HTTP layer can answer with an error response; nothing here exits the process.
"""

from __future__ import annotations

import asyncio
import html
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from src.config import SmtpSettings
from src.models import EmailRequest

logger = logging.getLogger(__name__)


class EmailConfigurationError(Exception):
    """Raised when SMTP host or credentials are not configured."""


class EmailDeliveryError(Exception):
    """Raised when the SMTP server rejects or drops the message."""


def render_welcome(name: str) -> tuple[str, str]:
    """Return (plain text, HTML) bodies greeting ``name``."""
    text = f"Hi {name},\n\nWelcome to Software Club! We're glad to have you.\n"
    safe = html.escape(name)
    markup = (
        "<!DOCTYPE html>\n"
        "<html><body>"
        f"<h1>Welcome, {safe}!</h1>"
        "<p>Thanks for joining Software Club. We're glad to have you.</p>"
        "</body></html>\n"
    )
    return text, markup


class EmailSender:
    """Builds and sends the welcome email."""

    def __init__(self, settings: SmtpSettings) -> None:
        self._settings = settings

    def check_configuration(self) -> None:
        s = self._settings
        if not s.host or not s.username or not s.password:
            raise EmailConfigurationError("SMTP host or credentials not set")

    def build_message(self, request: EmailRequest) -> EmailMessage:
        s = self._settings
        msg = EmailMessage()
        msg["From"] = formataddr((s.sender_name, s.username))
        msg["To"] = request.email
        msg["Subject"] = s.subject
        text, markup = render_welcome(request.name)
        msg.set_content(text)
        msg.add_alternative(markup, subtype="html")
        return msg

    async def send(self, request: EmailRequest) -> None:
        self.check_configuration()
        message = self.build_message(request)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Email delivery failed: %s", exc.__class__.__name__)
            raise EmailDeliveryError(str(exc)) from exc

    def _deliver(self, message: EmailMessage) -> None:
        s = self._settings
        with smtplib.SMTP(s.host, s.port, timeout=s.timeout_seconds) as smtp:
            smtp.starttls()
            smtp.login(s.username, s.password)
            smtp.send_message(message)
