# barbershop/store.py

"""
Schedule store: the only module that talks to the database on behalf of the
booking engine.

Every call re-reads current state; nothing is cached between requests
because bookings and blocks change underneath concurrent readers.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session, col, select

from barbershop.errors import SlotConflict, StoreUnavailable
from barbershop.models import (
    NON_BLOCKING_STATUSES,
    BlockedTime,
    Booking,
    Service,
    WorkingHours,
)

logger = logging.getLogger(__name__)


def _unavailable(exc: OperationalError) -> StoreUnavailable:
    logger.error("Booking store unavailable: %s", exc)
    return StoreUnavailable()


def get_working_hours(session: Session, day_of_week: str) -> Optional[WorkingHours]:
    """Working hours for a weekday, or None when the shop is closed that day."""
    try:
        hours = session.exec(
            select(WorkingHours).where(WorkingHours.day_of_week == day_of_week)
        ).first()
    except OperationalError as exc:
        raise _unavailable(exc) from exc

    if hours is None or not hours.is_available:
        return None
    return hours


def get_blocked_times(session: Session, on_date: date) -> List[BlockedTime]:
    try:
        return list(
            session.exec(select(BlockedTime).where(BlockedTime.date == on_date)).all()
        )
    except OperationalError as exc:
        raise _unavailable(exc) from exc


def get_bookings(
    session: Session,
    on_date: date,
    exclude_statuses: Iterable[str] = NON_BLOCKING_STATUSES,
) -> List[Booking]:
    stmt = select(Booking).where(Booking.appointment_date == on_date)
    excluded = list(exclude_statuses)
    if excluded:
        stmt = stmt.where(col(Booking.status).not_in(excluded))
    stmt = stmt.order_by(col(Booking.start_time))

    try:
        return list(session.exec(stmt).all())
    except OperationalError as exc:
        raise _unavailable(exc) from exc


def get_service(session: Session, service_id: int) -> Optional[Service]:
    try:
        return session.get(Service, service_id)
    except OperationalError as exc:
        raise _unavailable(exc) from exc


def get_booking(session: Session, booking_id: int) -> Optional[Booking]:
    try:
        return session.get(Booking, booking_id)
    except OperationalError as exc:
        raise _unavailable(exc) from exc


def insert_booking(session: Session, booking: Booking) -> Booking:
    """Insert a booking in a single commit.

    Raises SlotConflict when the live-slot unique index rejects the row; the
    session is rolled back so no partial booking is left behind.
    """
    session.add(booking)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise SlotConflict(str(exc.orig)) from exc
    except OperationalError as exc:
        session.rollback()
        raise _unavailable(exc) from exc

    session.refresh(booking)  # fills booking.id
    return booking
