from typing import Optional
from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import mapped_column, Mapped, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class Seat(Base, TimestampMixin):
    __table_args__ = (
        UniqueConstraint("showtime_id", "row", "seat_number", name="uix_showtime_seat_unique"),
    )
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    showtime_id: Mapped[int] = mapped_column(BigIntId, ForeignKey(
        "showtime.id", ondelete="CASCADE"), index=True, nullable=False)
    row: Mapped[str] = mapped_column(String(5), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_booked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # not cleared on cancellation, is_booked is the source of truth
    booking_id: Mapped[Optional[int]] = mapped_column(BigIntId, ForeignKey(
        "booking.id"), nullable=True)
    showtime: Mapped["Showtime"] = relationship(back_populates="seats")

    @property
    def label(self) -> str:
        return f"{self.row}{self.seat_number}"
