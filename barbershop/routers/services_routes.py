# barbershop/routers/services_routes.py

from datetime import date, datetime
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlmodel import Session, select

from barbershop.availability import get_availability, get_upcoming_availability
from barbershop.auth import get_current_user
from barbershop.config import settings
from barbershop.db import get_session
from barbershop.deps import get_now, http_error, require_role
from barbershop.errors import BookingError
from barbershop.models import Service
from barbershop.notifications import notify_booking_created
from barbershop.reservation import reserve, sync_customer_contact
from barbershop.schemas import (
    AvailabilityResponse,
    BookingCreate,
    BookingPublic,
    DayAvailabilityPublic,
    ServicePublic,
)

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(session: Session = Depends(get_session)):
    return session.exec(
        select(Service).where(Service.is_active == True).order_by(Service.name)  # noqa: E712
    ).all()


@router.get("/{service_id}/availability", response_model=AvailabilityResponse)
def service_availability(
    service_id: int,
    date: date,
    session: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    try:
        slots = get_availability(session, date, service_id, now)
    except BookingError as exc:
        raise http_error(exc)

    return {"service_id": service_id, "date": date, "slots": slots}


@router.get("/{service_id}/availability/upcoming", response_model=List[DayAvailabilityPublic])
def upcoming_availability(
    service_id: int,
    days: int = Query(default=settings.shop.upcoming_days, ge=1, le=60),
    session: Session = Depends(get_session),
    now: datetime = Depends(get_now),
):
    try:
        return get_upcoming_availability(
            session,
            service_id,
            now,
            days=days,
            preview=settings.shop.upcoming_preview_slots,
        )
    except BookingError as exc:
        raise http_error(exc)


@router.post("/{service_id}/bookings", response_model=BookingPublic, status_code=201)
def create_booking(
    service_id: int,
    payload: BookingCreate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    require_role(current_user, "user")
    customer_id = current_user["id"]

    try:
        booking = reserve(
            session,
            service_id=service_id,
            customer_id=customer_id,
            on_date=payload.date,
            start_time=payload.start_time,
            notes=payload.notes,
            now=now,
        )
    except BookingError as exc:
        raise http_error(exc)

    # Side effects only after the booking is committed; they never fail the request
    bind = session.get_bind()
    background_tasks.add_task(
        sync_customer_contact, customer_id, payload.name, payload.phone, bind=bind
    )
    background_tasks.add_task(notify_booking_created, booking.id, bind=bind)

    return booking
