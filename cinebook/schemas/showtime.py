from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from cinebook.schemas.movie import MovieResponse
from cinebook.services.seat_layout import MAX_ROWS


class ShowtimeBase(BaseModel):
    show_date: date
    show_time: time
    screen_number: int = Field(gt=0)
    price: int = Field(gt=0, description="Ticket price per seat")


class ShowtimeCreate(ShowtimeBase):
    movie_id: int
    total_seats: int = Field(gt=0)
    seats_per_row: int = Field(default=10, gt=0, le=50)

    @model_validator(mode="after")
    def check_layout_fits(self):
        if self.total_seats > MAX_ROWS * self.seats_per_row:
            raise ValueError(
                f"total_seats cannot exceed {MAX_ROWS * self.seats_per_row} with {self.seats_per_row} seats per row")
        return self

    class Config:
        extra = "forbid"


class ShowtimeUpdate(ShowtimeBase):
    """Seat capacity is fixed once seats are generated."""
    movie_id: Optional[int] = None
    show_date: Optional[date] = None
    show_time: Optional[time] = None
    screen_number: Optional[int] = Field(default=None, gt=0)
    price: Optional[int] = Field(default=None, gt=0)

    class Config:
        extra = "forbid"


class ShowtimeResponse(ShowtimeBase):
    id: int
    movie_id: int
    total_seats: int
    available_seats: int
    created_at: datetime

    class Config:
        from_attributes = True  # orm_mode


class ShowtimeDetailResponse(ShowtimeResponse):
    movie: Optional[MovieResponse] = None
