"""Email sending via SMTP, and the booking notifications built on it.

Notifications are off unless ``notifications_enabled`` is set. A failed send
is logged; it never fails the request that triggered it.
"""

import logging
from email.message import EmailMessage

import aiosmtplib

from courthub.core.config import settings
from courthub.models.booking import Booking

logger = logging.getLogger(__name__)


async def send_email(to: str, subject: str, body: str) -> None:
    """Send a plain-text email via SMTP."""
    message = EmailMessage()
    message["From"] = settings.smtp_from
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body)

    await aiosmtplib.send(message, hostname=settings.smtp_host, port=settings.smtp_port)


def _describe(booking: Booking) -> str:
    return (
        f"Court: {booking.court_id}\n"
        f"Date: {booking.booking_date.isoformat()}\n"
        f"Slots: {', '.join(booking.slots)}\n"
        f"Total: {booking.total_price:.2f} {settings.payment_currency.upper()}\n"
    )


async def _notify(to: str, subject: str, body: str) -> None:
    if not settings.notifications_enabled:
        return
    try:
        await send_email(to, subject, body)
    except (aiosmtplib.SMTPException, OSError):
        logger.warning("Could not send '%s' email to %s", subject, to, exc_info=True)
        return
    logger.info("Sent '%s' email to %s", subject, to)


async def notify_booking_approved(booking: Booking) -> None:
    body = (
        f"Hi {booking.user_name or 'there'},\n\n"
        f"Your booking has been approved. Complete payment to confirm it.\n\n"
        f"{_describe(booking)}\n"
        f"{settings.app_name}"
    )
    await _notify(booking.user_email, f"Your {settings.app_name} booking is approved", body)


async def notify_booking_confirmed(booking: Booking) -> None:
    body = (
        f"Hi {booking.user_name or 'there'},\n\n"
        f"We received your payment (transaction {booking.transaction_id}). Your booking is confirmed.\n\n"
        f"{_describe(booking)}\n"
        f"{settings.app_name}"
    )
    await _notify(booking.user_email, f"Your {settings.app_name} booking is confirmed", body)
