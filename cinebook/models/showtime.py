from datetime import date, time
from sqlalchemy import Date, ForeignKey, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class Showtime(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    movie_id: Mapped[int] = mapped_column(BigIntId, ForeignKey(
        "movie.id"), index=True, nullable=False)
    show_date: Mapped[date] = mapped_column(Date, nullable=False)
    show_time: Mapped[time] = mapped_column(Time, nullable=False)
    screen_number: Mapped[int] = mapped_column(Integer, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    # ticket price per seat, whole currency units
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    movie: Mapped["Movie"] = relationship(back_populates="showtimes")
    seats: Mapped[list["Seat"]] = relationship(
        back_populates="showtime", cascade="all, delete-orphan", passive_deletes=True)
