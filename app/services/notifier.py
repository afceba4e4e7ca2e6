"""
Contact form email notifications over SMTP.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage

from starlette.concurrency import run_in_threadpool

from app.schemas.contact import ContactForm
from app.utils.exceptions import DeliveryError

logger = logging.getLogger(__name__)

CONTACT_SUBJECT = "New Contact Form"


class EmailSendError(RuntimeError):
    pass


class SMTPMailer:
    """Blocking SMTP transport; port 465 uses implicit TLS, other ports try STARTTLS."""

    def __init__(self, host: str, port: int, user: str = "", password: str = "", sender: str = "", timeout: float = 15.0):
        self.host = host
        self.port = int(port)
        self.user = user
        self.password = password
        self.sender = sender
        self.timeout = timeout

    def send(self, to_email: str, subject: str, text: str) -> None:
        if not self.host:
            raise EmailSendError("MAIL_HOST not configured")
        if not self.sender:
            raise EmailSendError("MAIL_FROM (or MAIL_USER) not configured")

        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.set_content(text)

        if self.port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context) as s:
                if self.user and self.password:
                    s.login(self.user, self.password)
                s.send_message(msg)
            return

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as s:
            s.ehlo()
            if s.has_extn("starttls"):
                s.starttls(context=ssl.create_default_context())
                s.ehlo()
            if self.user and self.password:
                s.login(self.user, self.password)
            s.send_message(msg)


def format_contact_body(form: ContactForm) -> str:
    """Plain-text body shared by both notification emails."""
    return "\n".join([
        f"Name: {form.name}",
        f"Phone Number: {form.phone}",
        f"Email: {form.email}",
        f"Subject: {form.subject if form.subject is not None else ''}",
        f"Country Code: {form.country_code if form.country_code is not None else ''}",
    ])


class ContactNotifier:
    """
    Sends a contact form submission to the submitter and to the operator inbox.

    The two sends are independent: if the second one fails the first has
    already gone out, and the caller only learns that delivery failed.
    """

    def __init__(self, mailer: SMTPMailer, operator_inbox: str):
        self.mailer = mailer
        self.operator_inbox = operator_inbox

    async def notify(self, form: ContactForm) -> None:
        """
        Raises:
            DeliveryError: If either email could not be sent
        """
        body = format_contact_body(form)
        for recipient in (str(form.email), self.operator_inbox):
            try:
                await run_in_threadpool(self.mailer.send, recipient, CONTACT_SUBJECT, body)
            except Exception as e:
                logger.error(f"Error sending contact form email: {e}")
                raise DeliveryError("Error sending email", error=str(e)) from e
            logger.info(f"Contact form email sent to {recipient}")
