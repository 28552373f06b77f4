# barbershop/availability.py

"""
Availability filter.

``annotate`` is a pure function over already-loaded schedule data; the
``get_*`` helpers below it load that data from the store for one request.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from sqlmodel import Session

from barbershop import store
from barbershop.errors import ServiceNotFound, ServiceUnavailable
from barbershop.models import NON_BLOCKING_STATUSES, BlockedTime, Booking, Service
from barbershop.slots import generate_slots
from barbershop.timeutils import (
    day_of_week,
    intervals_overlap,
    parse_time,
    slot_datetime,
)

logger = logging.getLogger(__name__)

REASON_PAST = "Past time"
REASON_BLOCKED = "Time blocked"
REASON_BOOKED = "Already booked"


@dataclass(frozen=True)
class TimeSlot:
    time: str
    available: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class DayAvailability:
    """Summary of one day in the upcoming-availability view."""

    date: date
    label: str
    available_count: int
    slots: List[TimeSlot]


def annotate(
    slots: Sequence[str],
    on_date: date,
    service_duration: int,
    blocked_times: Sequence[BlockedTime],
    bookings: Sequence[Booking],
    now: datetime,
) -> List[TimeSlot]:
    """Mark each candidate slot available or not.

    Reasons follow a fixed precedence, first match wins:
    past time, then blocked time, then an existing booking.
    """
    # only today (and earlier dates) can have slots in the past
    check_past = on_date <= now.date()
    all_day_blocked = any(b.is_all_day for b in blocked_times)

    blocked_ranges = [
        (parse_time(b.start_time), parse_time(b.end_time))
        for b in blocked_times
        if not b.is_all_day and b.start_time and b.end_time
    ]
    booked_ranges = [
        (parse_time(b.start_time), parse_time(b.end_time))
        for b in bookings
        if b.status not in NON_BLOCKING_STATUSES
    ]

    result = []
    for slot in slots:
        start = parse_time(slot)
        end = start + service_duration

        if check_past and slot_datetime(on_date, slot) <= now:
            reason = REASON_PAST
        elif all_day_blocked or any(
            intervals_overlap(start, end, b_start, b_end) for b_start, b_end in blocked_ranges
        ):
            reason = REASON_BLOCKED
        elif any(
            intervals_overlap(start, end, b_start, b_end) for b_start, b_end in booked_ranges
        ):
            reason = REASON_BOOKED
        else:
            reason = None

        result.append(TimeSlot(time=slot, available=reason is None, reason=reason))
    return result


def get_bookable_service(session: Session, service_id: int) -> Service:
    service = store.get_service(session, service_id)
    if service is None:
        raise ServiceNotFound()
    if not service.is_active:
        raise ServiceUnavailable()
    return service


def availability_for_service(
    session: Session, on_date: date, service: Service, now: datetime
) -> List[TimeSlot]:
    # 1) Working hours for that weekday
    hours = store.get_working_hours(session, day_of_week(on_date))
    if hours is None:
        return []

    # 2) A day off removes the whole day
    blocked_times = store.get_blocked_times(session, on_date)
    if any(b.is_all_day for b in blocked_times):
        return []

    # 3) Generate slots, then flag blocks and bookings
    bookings = store.get_bookings(session, on_date)
    slots = generate_slots(hours, service.duration)
    return annotate(slots, on_date, service.duration, blocked_times, bookings, now)


def get_availability(
    session: Session, on_date: date, service_id: int, now: datetime
) -> List[TimeSlot]:
    """All slots for ``service_id`` on ``on_date``, each flagged available or not."""
    service = get_bookable_service(session, service_id)
    slots = availability_for_service(session, on_date, service, now)
    logger.debug(
        "Availability for service %s on %s: %d/%d slots free",
        service_id,
        on_date,
        sum(1 for s in slots if s.available),
        len(slots),
    )
    return slots


def _day_label(offset: int, on_date: date) -> str:
    if offset == 0:
        return "Today"
    if offset == 1:
        return "Tomorrow"
    return f"{on_date:%a, %b} {on_date.day}"


def get_upcoming_availability(
    session: Session,
    service_id: int,
    now: datetime,
    days: int = 7,
    preview: int = 8,
) -> List[DayAvailability]:
    """Availability summary for ``days`` days starting today."""
    service = get_bookable_service(session, service_id)

    upcoming = []
    for offset in range(days):
        on_date = now.date() + timedelta(days=offset)
        open_slots = [
            s for s in availability_for_service(session, on_date, service, now) if s.available
        ]
        upcoming.append(
            DayAvailability(
                date=on_date,
                label=_day_label(offset, on_date),
                available_count=len(open_slots),
                slots=open_slots[:preview],
            )
        )
    return upcoming
