"""Email relay for contact form submissions."""

import html
import logging
from typing import Optional
from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from src.schemas import ContactRequest

# Configure logging
logger = logging.getLogger(__name__)


class ContactMailer:
    """Sends contact form messages to the site owner over SMTP."""

    def __init__(self, config: ConnectionConfig, recipient: str):
        self.fastmail = FastMail(config)
        self.recipient = recipient

    @staticmethod
    def render_body(contact: ContactRequest) -> str:
        """Render the HTML body for a contact message."""
        message_html = html.escape(contact.message).replace("\n", "<br>")
        return (
            "<h2>New contact form submission</h2>"
            f"<p><strong>Name:</strong> {html.escape(contact.name)}</p>"
            f"<p><strong>Email:</strong> {html.escape(str(contact.email))}</p>"
            f"<p><strong>Subject:</strong> {html.escape(contact.subject or '(none)')}</p>"
            f"<p>{message_html}</p>"
        )

    async def send_contact_message(self, contact: ContactRequest):
        """
        Relay a contact form submission.

        Args:
            contact: Validated contact form data

        Raises:
            Exception: Whatever the SMTP transport raises
        """
        message = MessageSchema(
            subject=f"Contact form: {contact.subject or 'New message'} - {contact.name}",
            recipients=[self.recipient],
            reply_to=[contact.email],
            body=self.render_body(contact),
            subtype=MessageType.html,
        )
        await self.fastmail.send_message(message)
        logger.info(f"Contact message relayed to {self.recipient}")


def build_mailer(
    username: str,
    password: str,
    mail_from: str,
    port: int,
    server: str,
    starttls: bool,
    ssl_tls: bool,
    recipient: str,
) -> Optional[ContactMailer]:
    """
    Create the contact mailer, or None when the relay is not configured.

    Returns:
        Optional[ContactMailer]: Mailer ready to send, or None
    """
    if not mail_from or not recipient or not password:
        logger.warning("Email relay not configured, contact messages will only be logged")
        return None

    config = ConnectionConfig(
        MAIL_USERNAME=username or mail_from,
        MAIL_PASSWORD=password,
        MAIL_FROM=mail_from,
        MAIL_PORT=port,
        MAIL_SERVER=server,
        MAIL_STARTTLS=starttls,
        MAIL_SSL_TLS=ssl_tls,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True,
    )
    return ContactMailer(config, recipient)
