# barbershop/models.py

from typing import Optional
from datetime import datetime, timezone, date as Date
from decimal import Decimal

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field

# Every status except "cancelled" occupies its slot.
BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled", "no_show")
NON_BLOCKING_STATUSES = frozenset({"cancelled"})


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str = "user"  # user or admin
    name: Optional[str] = None
    phone: Optional[str] = None


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    price: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    duration: int  # minutes, 15-300 in steps of 15
    category: Optional[str] = None
    is_active: bool = True


class WorkingHours(SQLModel, table=True):
    __tablename__ = "working_hours"

    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_week: str = Field(index=True, unique=True)  # "monday".."sunday"
    start_time: str  # "HH:MM"
    end_time: str
    is_available: bool = True


class BlockedTime(SQLModel, table=True):
    __tablename__ = "blocked_time"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: Date = Field(index=True)
    start_time: Optional[str] = None  # unset for all-day blocks
    end_time: Optional[str] = None
    reason: Optional[str] = None  # vacation, break, ...
    is_all_day: bool = False


class Booking(SQLModel, table=True):
    __table_args__ = (
        # Backstop against double-booking: one live booking per slot.
        # Cancelled rows are excluded so a freed slot can be booked again.
        Index(
            "uq_booking_slot",
            "service_id",
            "appointment_date",
            "start_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="user.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    appointment_date: Date = Field(index=True)
    start_time: str
    end_time: str
    status: str = "pending"
    total_price: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
