from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

from .user import User, UserRole, UserSession
from .movie import Movie
from .showtime import Showtime
from .seat import Seat
from .food_item import FoodItem
from .booking import Booking, BookingStatus, PaymentMethod
from .booking_seat import BookingSeat
from .booking_food import BookingFood
