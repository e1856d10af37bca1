from datetime import date
from typing import Optional
from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinebook.db.base import Base, BigIntId
from cinebook.models import TimestampMixin


class Movie(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    # content rating, e.g. "PG-13"
    rating: Mapped[str] = mapped_column(String(20), nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    poster_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    trailer_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    showtimes: Mapped[list["Showtime"]] = relationship(back_populates="movie", passive_deletes=True)
