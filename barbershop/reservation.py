# barbershop/reservation.py

"""
Booking reservation: the write path.

``reserve`` re-runs the availability check right before inserting, then
relies on the ``uq_booking_slot`` unique index to settle any race that
slips between the check and the commit. Both failures surface as
``SlotTaken``.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from barbershop import store
from barbershop.availability import availability_for_service, get_bookable_service
from barbershop.config import shop_now
from barbershop.db import engine
from barbershop.errors import BookingLocked, BookingNotFound, SlotConflict, SlotTaken
from barbershop.models import BOOKING_STATUSES, NON_BLOCKING_STATUSES, Booking, User
from barbershop.timeutils import add_minutes, intervals_overlap, normalize_time, parse_time

logger = logging.getLogger(__name__)

# statuses that carry an operator-supplied reason
REASON_STATUSES = ("cancelled", "no_show")


def reserve(
    session: Session,
    service_id: int,
    customer_id: int,
    on_date: date,
    start_time: str,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    """Reserve ``start_time`` on ``on_date`` for a customer.

    Raises ServiceNotFound, ServiceUnavailable, InvalidFormat or SlotTaken.
    The returned booking is committed with status "pending".
    """
    now = now or shop_now()

    # 1) Service must exist and be bookable
    service = get_bookable_service(session, service_id)

    # 2) Interval of the requested appointment
    start_time = normalize_time(start_time)
    end_time = add_minutes(start_time, service.duration)

    # 3) Re-validate against current state, not an earlier read
    slots = availability_for_service(session, on_date, service, now)
    requested = next((s for s in slots if s.time == start_time), None)
    if requested is None or not requested.available:
        logger.info(
            "Slot %s on %s for service %s rejected: %s",
            start_time,
            on_date,
            service_id,
            requested.reason if requested else "not offered",
        )
        raise SlotTaken()

    # 4) Atomic insert; the unique index decides concurrent winners
    booking = Booking(
        customer_id=customer_id,
        service_id=service.id,
        appointment_date=on_date,
        start_time=start_time,
        end_time=end_time,
        status="pending",
        total_price=service.price,
        notes=notes or None,
    )
    try:
        booking = store.insert_booking(session, booking)
    except SlotConflict:
        logger.info("Slot %s on %s for service %s lost the insert race", start_time, on_date, service_id)
        raise SlotTaken() from None

    logger.info(
        "Booking %s created: service %s on %s %s-%s for customer %s",
        booking.id,
        service_id,
        on_date,
        start_time,
        end_time,
        customer_id,
    )
    return booking


def sync_customer_contact(
    customer_id: int,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    bind=None,
) -> None:
    """Update the customer's name/phone if they changed. Best effort."""
    if not name and not phone:
        return
    try:
        with Session(bind or engine) as session:
            customer = session.get(User, customer_id)
            if customer is None:
                return
            changed = False
            if name and customer.name != name:
                customer.name = name
                changed = True
            if phone and customer.phone != phone:
                customer.phone = phone
                changed = True
            if changed:
                session.add(customer)
                session.commit()
                logger.info("Customer %s contact details updated", customer_id)
    except Exception:
        logger.exception("Updating contact details for customer %s failed", customer_id)


def _check_slot_still_free(session: Session, booking: Booking) -> None:
    # any live booking overlapping this one, whatever the service
    start, end = parse_time(booking.start_time), parse_time(booking.end_time)
    for other in store.get_bookings(session, booking.appointment_date):
        if other.id == booking.id:
            continue
        if intervals_overlap(start, end, parse_time(other.start_time), parse_time(other.end_time)):
            logger.info(
                "Booking %s cannot be revived: overlaps booking %s at %s",
                booking.id,
                other.id,
                other.start_time,
            )
            raise SlotTaken()


def update_status(
    session: Session,
    booking_id: int,
    status: str,
    cancel_reason: Optional[str] = None,
) -> Tuple[str, Booking]:
    """Move a booking to ``status``. Returns the previous status and the booking."""
    if status not in BOOKING_STATUSES:
        raise ValueError(f"Unknown booking status: {status!r}")

    booking = store.get_booking(session, booking_id)
    if booking is None:
        raise BookingNotFound()

    old_status = booking.status
    if old_status in NON_BLOCKING_STATUSES and status not in NON_BLOCKING_STATUSES:
        _check_slot_still_free(session, booking)

    booking.status = status
    booking.cancel_reason = cancel_reason if status in REASON_STATUSES else None
    booking.updated_at = datetime.now(timezone.utc)

    session.add(booking)
    try:
        session.commit()
    except IntegrityError:
        # reviving a cancelled booking whose slot was booked again
        session.rollback()
        raise SlotTaken() from None
    session.refresh(booking)

    logger.info("Booking %s status: %s -> %s", booking_id, old_status, status)
    return old_status, booking


def delete_booking(session: Session, booking_id: int) -> str:
    """Delete a booking and return the status it had."""
    booking = store.get_booking(session, booking_id)
    if booking is None:
        raise BookingNotFound()

    # completed bookings are kept as history
    if booking.status == "completed":
        raise BookingLocked()

    status = booking.status
    session.delete(booking)
    session.commit()
    logger.info("Booking %s deleted (was %s)", booking_id, status)
    return status
