from .base import CineBookError


class NotFoundError(CineBookError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class MovieNotFoundError(NotFoundError):
    code = "MOVIE_NOT_FOUND"
    message = "Movie not found"


class ShowtimeNotFoundError(NotFoundError):
    code = "SHOWTIME_NOT_FOUND"
    message = "Showtime not found"


class SeatNotFoundError(NotFoundError):
    code = "SEAT_NOT_FOUND"
    message = "Seat not found"


class FoodItemNotFoundError(NotFoundError):
    code = "FOOD_ITEM_NOT_FOUND"
    message = "Food item not found"


class BookingNotFoundError(NotFoundError):
    code = "BOOKING_NOT_FOUND"
    message = "Booking not found"
