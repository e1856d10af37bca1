from .base import CineBookError


class ConflictError(CineBookError):
    status_code = 409
    code = "CONFLICT"


class SeatAlreadyBookedError(ConflictError):
    code = "SEAT_ALREADY_BOOKED"

    def __init__(self, seat_labels=None):
        self.seat_labels = list(seat_labels or [])
        if self.seat_labels:
            message = f"Seats already booked: {', '.join(self.seat_labels)}"
        else:
            message = "One or more seats are already booked"
        super().__init__(message)


class BookingAlreadyCancelledError(ConflictError):
    code = "BOOKING_ALREADY_CANCELLED"

    def __init__(self):
        super().__init__("Booking is already cancelled")


class ResourceInUseError(ConflictError):
    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)
