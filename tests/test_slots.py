"""Tests for candidate slot generation."""

import pytest

from barbershop.models import WorkingHours
from barbershop.slots import generate_slots
from barbershop.timeutils import parse_time


def _hours(start: str, end: str, is_available: bool = True) -> WorkingHours:
    return WorkingHours(day_of_week="monday", start_time=start, end_time=end, is_available=is_available)


class TestGenerateSlots:
    def test_hourly_service(self):
        assert generate_slots(_hours("09:00", "12:00"), 60) == ["09:00", "10:00", "11:00"]

    def test_step_is_service_duration(self):
        assert generate_slots(_hours("09:00", "11:00"), 45) == ["09:00", "09:45"]

    def test_last_slot_may_end_at_closing(self):
        # 11:15 + 45 ends exactly at 12:00
        assert generate_slots(_hours("09:00", "12:00"), 45) == ["09:00", "09:45", "10:30", "11:15"]

    def test_last_slot_must_finish_by_closing(self):
        # 11:15 + 45 would end at 12:00, past 11:50
        assert generate_slots(_hours("09:00", "11:50"), 45) == ["09:00", "09:45", "10:30"]

    def test_window_shorter_than_service(self):
        assert generate_slots(_hours("09:00", "09:30"), 45) == []

    def test_closed_day(self):
        assert generate_slots(None, 30) == []
        assert generate_slots(_hours("09:00", "17:00", is_available=False), 30) == []

    def test_non_positive_duration(self):
        with pytest.raises(ValueError):
            generate_slots(_hours("09:00", "12:00"), 0)

    def test_restartable(self):
        hours = _hours("08:30", "18:00")
        assert generate_slots(hours, 30) == generate_slots(hours, 30)

    @pytest.mark.parametrize(
        "start,end,duration",
        [
            ("09:00", "17:00", 15),
            ("09:00", "17:00", 45),
            ("08:15", "19:40", 60),
            ("10:00", "13:00", 75),
            ("06:00", "23:59", 300),
        ],
    )
    def test_count_spacing_and_bounds(self, start, end, duration):
        slots = generate_slots(_hours(start, end), duration)
        t0, t1 = parse_time(start), parse_time(end)
        minutes = [parse_time(s) for s in slots]

        assert len(slots) == (t1 - t0) // duration
        assert minutes[0] == t0
        assert all(b - a == duration for a, b in zip(minutes, minutes[1:]))
        assert minutes[-1] + duration <= t1
