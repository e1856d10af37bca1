from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class BookingFood(Base, TimestampMixin):
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_booking_food_quantity_positive"),
    )
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True)
    booking_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("booking.id"), index=True, nullable=False)
    food_item_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("fooditem.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # food item price at the time of booking
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False)
    booking: Mapped["Booking"] = relationship(back_populates="food_lines")
    food_item: Mapped["FoodItem"] = relationship()
