# barbershop/errors.py

"""Domain errors raised by the booking engine.

Routes translate these into HTTP responses; the engine itself never
raises ``HTTPException``.
"""


class BookingError(Exception):
    """Base class for every error the booking engine reports to callers."""

    code = "booking_error"
    default_message = "Booking request failed"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormat(BookingError, ValueError):
    code = "invalid_format"
    default_message = "Invalid time format (HH:MM)"


class ServiceNotFound(BookingError):
    code = "service_not_found"
    default_message = "Service not found"


class ServiceUnavailable(BookingError):
    code = "service_unavailable"
    default_message = "Service is not available for booking"


class SlotTaken(BookingError):
    """The requested slot failed re-validation or lost the insert race.

    Expected under contention; the caller should pick another slot.
    """

    code = "slot_taken"
    default_message = "Selected time slot is no longer available"


class BookingNotFound(BookingError):
    code = "booking_not_found"
    default_message = "Booking not found"


class BookingLocked(BookingError):
    code = "booking_locked"
    default_message = (
        "Cannot delete completed bookings. This booking has already been finished."
    )


class StoreUnavailable(BookingError):
    """The database could not be reached. Nothing was written; safe to retry."""

    code = "store_unavailable"
    default_message = "Booking store is unavailable, please try again"


class SlotConflict(Exception):
    """Unique-index violation on insert. Internal to the store layer."""
