# barbershop/deps.py

from datetime import datetime

from fastapi import Depends, HTTPException

from barbershop.auth import get_current_user
from barbershop.config import shop_now
from barbershop.errors import BookingError

# HTTP status per domain error code
ERROR_STATUS = {
    "invalid_format": 422,
    "service_not_found": 404,
    "service_unavailable": 422,
    "slot_taken": 409,
    "booking_not_found": 404,
    "booking_locked": 409,
    "store_unavailable": 503,
}


def require_role(user: dict, role: str):
    if user["role"] != role:
        raise HTTPException(status_code=403, detail="Forbidden")


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    require_role(current_user, "admin")
    return current_user


def http_error(exc: BookingError) -> HTTPException:
    return HTTPException(
        status_code=ERROR_STATUS.get(exc.code, 400),
        detail={"error_code": exc.code, "message": exc.message},
    )


def get_now() -> datetime:
    """Request-time "now" in shop-local time. Overridden in tests."""
    return shop_now()
