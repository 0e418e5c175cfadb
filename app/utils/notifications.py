import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Iterable, Optional

from fastapi import BackgroundTasks

from app.config import Settings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    recipient: str
    subject: str
    message: str


class SmtpMailer:
    """Sends plain-text mail through an authenticated SMTP relay."""

    def __init__(self, host: str, port: int, username: str, password: str):
        self.host = host
        self.port = port
        self.username = username
        self.password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            settings.smtp_host,
            settings.smtp_port,
            settings.transporter_email,
            settings.transporter_pass,
        )

    def send(self, notification: Notification) -> None:
        mail = EmailMessage()
        mail["From"] = self.username
        mail["To"] = notification.recipient
        mail["Subject"] = notification.subject
        mail.set_content(notification.message)

        with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
            smtp.starttls()
            smtp.login(self.username, self.password)
            smtp.send_message(mail)


class NotificationDispatcher:
    """
    Outbound mail queue.

    Deliveries are queued on the request's background tasks and run after the
    response has been sent. A failed delivery is logged and dropped; it never
    reaches the caller and is not retried.
    """

    def __init__(self, mailer):
        self.mailer = mailer

    def dispatch(self, notification: Notification) -> bool:
        try:
            self.mailer.send(notification)
        except Exception:
            logger.exception(f"Failed to send '{notification.subject}' to {notification.recipient}")
            return False
        logger.info(f"Sent '{notification.subject}' to {notification.recipient}")
        return True

    def schedule(self, background_tasks: BackgroundTasks, notifications: Iterable[Notification]) -> int:
        queued = 0
        for notification in notifications:
            background_tasks.add_task(self.dispatch, notification)
            queued += 1
        return queued


def booking_notifications(
    booking_id: str,
    transaction_id: str,
    guest_email: Optional[str],
    host_email: Optional[str],
) -> Iterable[Notification]:
    """Messages sent to both sides once a booking is stored."""
    message = f"Booking Id: {booking_id}, TransactionId: {transaction_id}"
    for recipient, subject in (
        (guest_email, "Booking Successful!"),
        (host_email, "Your room got booked!"),
    ):
        if not recipient:
            logger.warning(f"Skipping '{subject}' for booking {booking_id}: no recipient")
            continue
        yield Notification(recipient=recipient, subject=subject, message=message)
