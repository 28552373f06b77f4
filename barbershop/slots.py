# barbershop/slots.py

from typing import List, Optional

from barbershop.models import WorkingHours
from barbershop.timeutils import format_time, parse_time


def generate_slots(working_hours: Optional[WorkingHours], service_duration: int) -> List[str]:
    """Candidate start times for one day.

    Slots are ``service_duration`` long and laid back to back from the
    opening time, so they never overlap each other. A slot is only offered
    if it finishes by closing time.
    """
    if service_duration <= 0:
        raise ValueError(f"service_duration must be positive, got {service_duration}")
    if working_hours is None or not working_hours.is_available:
        return []

    day_start = parse_time(working_hours.start_time)
    day_end = parse_time(working_hours.end_time)

    slots = []
    current = day_start
    while current + service_duration <= day_end:
        slots.append(format_time(current))
        current += service_duration
    return slots
