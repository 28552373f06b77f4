# barbershop/notifications.py

"""
Best-effort booking notifications.

Plain-text email over SMTP when ``SMTP_HOST`` is configured, otherwise the
message is only logged. Every entry point swallows and logs its own
failures: a notification problem never turns a committed booking into an
error for the customer.
"""

import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Optional

from sqlmodel import Session

from barbershop.config import AppConfig, settings
from barbershop.db import engine
from barbershop.models import Booking, Service, User

logger = logging.getLogger(__name__)

SUBJECTS = {
    "pending": "Booking received - {service}",
    "confirmed": "Booking Confirmed - {service}",
    "cancelled": "Booking Cancelled - {service}",
}


def send_email(to: str, subject: str, body: str, config: Optional[AppConfig] = None) -> bool:
    """Send a plain-text email. Returns True on success, False otherwise."""
    email = (config or settings).email
    if not email.smtp_host:
        logger.info("SMTP not configured, email to %s not sent: %s", to, subject)
        return False

    msg = MIMEText(body)
    msg["Subject"] = subject
    msg["From"] = email.from_address
    msg["To"] = to

    with smtplib.SMTP(email.smtp_host, email.smtp_port, timeout=10) as server:
        server.starttls(context=ssl.create_default_context())
        if email.smtp_user and email.smtp_password:
            server.login(email.smtp_user, email.smtp_password)
        server.sendmail(email.from_address, [to], msg.as_string())

    logger.info("Email sent to %s: %s", to, subject)
    return True


def _booking_body(booking: Booking, service: Service, customer: User, reason: Optional[str]) -> str:
    lines = [
        f"Booking reference: #{booking.id}",
        f"Service: {service.name}",
        f"Date: {booking.appointment_date:%A, %d %B %Y}",
        f"Time: {booking.start_time} - {booking.end_time}",
        f"Duration: {service.duration} minutes",
        f"Price: {booking.total_price}",
        f"Status: {booking.status}",
        f"Customer: {customer.name or customer.email}",
    ]
    if customer.phone:
        lines.append(f"Phone: {customer.phone}")
    if booking.notes:
        lines.append(f"Notes: {booking.notes}")
    if reason:
        lines.append(f"Reason: {reason}")
    return "\n".join(lines)


def notify_booking_status(
    booking_id: int,
    reason: Optional[str] = None,
    bind=None,
    config: Optional[AppConfig] = None,
) -> None:
    """Email the customer (and the operator, if set) about a booking's status.

    Runs after the response has been sent, in its own session.
    """
    config = config or settings
    try:
        with Session(bind or engine) as session:
            booking = session.get(Booking, booking_id)
            if booking is None:
                logger.warning("Notification skipped, booking %s no longer exists", booking_id)
                return
            template = SUBJECTS.get(booking.status)
            if template is None:
                return

            service = session.get(Service, booking.service_id)
            customer = session.get(User, booking.customer_id)
            subject = template.format(service=service.name)
            body = _booking_body(booking, service, customer, reason)

        send_email(customer.email, subject, body, config)
        if config.email.operator_address and booking.status == "pending":
            send_email(config.email.operator_address, f"New booking #{booking_id}", body, config)
    except Exception:
        logger.exception("Notification for booking %s failed", booking_id)


def notify_booking_created(booking_id: int, bind=None, config: Optional[AppConfig] = None) -> None:
    notify_booking_status(booking_id, bind=bind, config=config)
