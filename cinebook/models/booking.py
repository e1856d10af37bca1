from datetime import datetime
from enum import Enum
from typing import List
from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin, utcnow


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"
    CASH = "cash"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Booking(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey(
        "user.id"), index=True, nullable=False)
    showtime_id: Mapped[int] = mapped_column(BigIntId, ForeignKey(
        "showtime.id"), index=True, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    # showtime price at the time of booking
    ticket_price: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(SAEnum(
        PaymentMethod, name="payment_method_enum", values_callable=_enum_values), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(SAEnum(
        BookingStatus, name="booking_status_enum", values_callable=_enum_values),
        nullable=False, default=BookingStatus.CONFIRMED)
    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False)
    seat_links: Mapped[List["BookingSeat"]] = relationship(
        back_populates="booking", cascade="all, delete-orphan")
    food_lines: Mapped[List["BookingFood"]] = relationship(
        back_populates="booking", cascade="all, delete-orphan")
    showtime: Mapped["Showtime"] = relationship()
