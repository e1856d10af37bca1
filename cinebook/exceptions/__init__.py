from .base import CineBookError
from .invalid_input import InvalidInputError
from .not_found import (
    NotFoundError,
    MovieNotFoundError,
    ShowtimeNotFoundError,
    SeatNotFoundError,
    FoodItemNotFoundError,
    BookingNotFoundError,
)
from .conflict import ConflictError, SeatAlreadyBookedError, BookingAlreadyCancelledError, ResourceInUseError
from .auth import UnauthorizedError, ForbiddenError

__all__ = [
    "CineBookError",
    "InvalidInputError",
    "NotFoundError",
    "MovieNotFoundError",
    "ShowtimeNotFoundError",
    "SeatNotFoundError",
    "FoodItemNotFoundError",
    "BookingNotFoundError",
    "ConflictError",
    "SeatAlreadyBookedError",
    "BookingAlreadyCancelledError",
    "ResourceInUseError",
    "UnauthorizedError",
    "ForbiddenError",
]
