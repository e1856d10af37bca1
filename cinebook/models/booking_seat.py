from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin
from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship


class BookingSeat(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)
    booking_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("booking.id"), index=True, nullable=False)
    seat_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("seat.id"), nullable=False)
    booking: Mapped["Booking"] = relationship(back_populates="seat_links")
    seat: Mapped["Seat"] = relationship()
