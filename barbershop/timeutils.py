# barbershop/timeutils.py

import re
from datetime import date, datetime, time

from barbershop.errors import InvalidFormat

# 24-hour clock, leading zero on the hour optional ("9:00" and "09:00")
TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
_TIME_RE = re.compile(TIME_PATTERN)

MINUTES_PER_DAY = 24 * 60

DAYS_OF_WEEK = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def parse_time(value: str) -> int:
    """Convert ``"HH:MM"`` to minutes since midnight."""
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise InvalidFormat(f"Invalid time format (HH:MM): {value!r}")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def format_time(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded ``"HH:MM"``.

    There is no day rollover: callers keep slot ends inside the working
    window, so anything outside 00:00-23:59 is an error.
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidFormat(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: str) -> str:
    """``"9:00"`` -> ``"09:00"``."""
    return format_time(parse_time(value))


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # half-open: touching endpoints are not a conflict
    return a_start < b_end and a_end > b_start


def add_minutes(value: str, duration: int) -> str:
    """End time of a booking starting at ``value`` lasting ``duration`` minutes."""
    return format_time(parse_time(value) + duration)


def day_of_week(on_date: date) -> str:
    return DAYS_OF_WEEK[on_date.weekday()]


def slot_datetime(on_date: date, value: str) -> datetime:
    minutes = parse_time(value)
    return datetime.combine(on_date, time(minutes // 60, minutes % 60))
