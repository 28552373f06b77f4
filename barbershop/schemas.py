# barbershop/schemas.py

from pydantic import BaseModel, Field, model_validator
from enum import Enum
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from barbershop.timeutils import TIME_PATTERN, parse_time


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class DayOfWeek(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"


class UserPublic(BaseModel):
    id: int
    email: str
    role: UserRole
    name: Optional[str] = None
    phone: Optional[str] = None


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    name: Optional[str] = None
    phone: Optional[str] = None


class ServicePublic(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    duration: int
    category: Optional[str] = None


class WorkingHoursIn(BaseModel):
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    is_available: bool = True

    @model_validator(mode="after")
    def check_order(self):
        if self.is_available and parse_time(self.end_time) <= parse_time(self.start_time):
            raise ValueError("End time must be after start time")
        return self


class WorkingHoursPublic(BaseModel):
    day_of_week: DayOfWeek
    start_time: str
    end_time: str
    is_available: bool


class BlockedTimeCreate(BaseModel):
    date: date
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    reason: Optional[str] = Field(default=None, max_length=200)
    is_all_day: bool = False

    @model_validator(mode="after")
    def check_window(self):
        if self.is_all_day:
            return self
        if not self.start_time or not self.end_time:
            raise ValueError("Partial-day blocks need both start_time and end_time")
        if parse_time(self.end_time) <= parse_time(self.start_time):
            raise ValueError("End time must be after start time")
        return self


class BlockedTimePublic(BaseModel):
    id: int
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None
    is_all_day: bool


class TimeSlotPublic(BaseModel):
    time: str
    available: bool
    reason: Optional[str] = None


class AvailabilityResponse(BaseModel):
    service_id: int
    date: date
    slots: List[TimeSlotPublic]


class DayAvailabilityPublic(BaseModel):
    date: date
    label: str
    available_count: int
    slots: List[TimeSlotPublic]


class BookingCreate(BaseModel):
    date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    notes: Optional[str] = Field(default=None, max_length=500)
    # optional contact details, synced onto the customer record after booking
    name: Optional[str] = None
    phone: Optional[str] = None


class BookingPublic(BaseModel):
    id: int
    customer_id: int
    service_id: int
    appointment_date: date
    start_time: str
    end_time: str
    status: BookingStatus
    total_price: Decimal
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    cancel_reason: Optional[str] = None


class StatusChange(BaseModel):
    booking_id: int
    old_status: BookingStatus
    new_status: BookingStatus
