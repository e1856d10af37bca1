from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class SeatBase(BaseModel):
    row: str
    seat_number: int


class SeatUpdate(BaseModel):
    """Only the booking fields are writable; anything else in the payload is dropped."""
    is_booked: Optional[bool] = None
    booking_id: Optional[int] = None

    class Config:
        extra = "ignore"


class SeatResponse(SeatBase):
    id: int
    showtime_id: int
    label: str
    is_booked: bool
    booking_id: Optional[int] = None
    updated_at: datetime

    class Config:
        from_attributes = True
