# barbershop/routers/bookings_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.auth import get_current_user
from barbershop.db import get_session
from barbershop.deps import http_error, require_admin, require_role
from barbershop.errors import BookingError
from barbershop.models import BOOKING_STATUSES, Booking
from barbershop.notifications import notify_booking_status
from barbershop.reservation import delete_booking, update_status
from barbershop.schemas import BookingPublic, BookingStatusUpdate, StatusChange

router = APIRouter(
    tags=["bookings"],
)


def _check_status_filter(status: str):
    if status != "all" and status not in BOOKING_STATUSES:
        raise HTTPException(
            status_code=422,
            detail=f"status must be one of {', '.join(BOOKING_STATUSES)} or 'all'",
        )


@router.get("/bookings", response_model=List[BookingPublic])
def list_bookings(
    status: str = "all",
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(require_admin),
):
    _check_status_filter(status)

    stmt = select(Booking)
    if on_date is not None:
        stmt = stmt.where(Booking.appointment_date == on_date)
    if status != "all":
        stmt = stmt.where(Booking.status == status)

    stmt = stmt.order_by(Booking.appointment_date, Booking.start_time)
    return session.exec(stmt).all()


@router.patch("/bookings/{booking_id}/status", response_model=StatusChange)
def change_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    current_user: dict = Depends(require_admin),
):
    try:
        old_status, booking = update_status(
            session, booking_id, update.status.value, update.cancel_reason
        )
    except BookingError as exc:
        raise http_error(exc)

    # customers hear about confirmations and cancellations
    if booking.status in ("confirmed", "cancelled") and booking.status != old_status:
        background_tasks.add_task(
            notify_booking_status,
            booking.id,
            booking.cancel_reason,
            bind=session.get_bind(),
        )

    return {"booking_id": booking.id, "old_status": old_status, "new_status": booking.status}


@router.delete("/bookings/{booking_id}", status_code=204)
def remove_booking(
    booking_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(require_admin),
):
    try:
        delete_booking(session, booking_id)
    except BookingError as exc:
        raise http_error(exc)


@router.get("/me/bookings", response_model=List[BookingPublic])
def list_my_bookings(
    status: str = "all",
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "user")
    _check_status_filter(status)

    stmt = select(Booking).where(Booking.customer_id == current_user["id"])
    if status != "all":
        stmt = stmt.where(Booking.status == status)

    stmt = stmt.order_by(Booking.appointment_date, Booking.start_time)
    return session.exec(stmt).all()
