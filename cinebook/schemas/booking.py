from datetime import datetime
from typing import Annotated, Dict, List
from pydantic import BaseModel, Field, field_validator

from cinebook.models.booking import Booking, BookingStatus, PaymentMethod

Quantity = Annotated[int, Field(gt=0)]


class BookingSelection(BaseModel):
    showtime_id: int
    seat_ids: List[int] = Field(min_length=1)
    food_items: Dict[int, Quantity] = Field(default_factory=dict, description="food item id -> quantity")

    @field_validator("seat_ids")
    @classmethod
    def no_duplicate_seats(cls, seat_ids: List[int]) -> List[int]:
        if len(set(seat_ids)) != len(seat_ids):
            raise ValueError("seat_ids must not contain duplicates")
        return seat_ids

    class Config:
        extra = "forbid"


class BookingQuoteRequest(BookingSelection):
    pass


class BookingCreate(BookingSelection):
    payment_method: PaymentMethod


class BookingSeatResponse(BaseModel):
    id: int
    row: str
    seat_number: int
    label: str

    class Config:
        from_attributes = True


class BookingFoodResponse(BaseModel):
    food_item_id: int
    name: str
    category: str
    unit_price: int
    quantity: int
    line_total: int


class BookingResponse(BaseModel):
    id: int
    user_id: str
    showtime_id: int
    total_seats: int
    ticket_price: int
    total_amount: int
    payment_method: PaymentMethod
    status: BookingStatus
    booking_date: datetime
    created_at: datetime
    updated_at: datetime
    seats: List[BookingSeatResponse] = Field(default_factory=list)
    food_items: List[BookingFoodResponse] = Field(default_factory=list)

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        """Expects seat_links.seat and food_lines.food_item to be loaded."""
        seats = sorted(
            (link.seat for link in booking.seat_links),
            key=lambda seat: (seat.row, seat.seat_number))
        food_items = [
            BookingFoodResponse(
                food_item_id=line.food_item_id,
                name=line.food_item.name,
                category=line.food_item.category,
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line.unit_price * line.quantity)
            for line in booking.food_lines
        ]
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            showtime_id=booking.showtime_id,
            total_seats=booking.total_seats,
            ticket_price=booking.ticket_price,
            total_amount=booking.total_amount,
            payment_method=booking.payment_method,
            status=booking.status,
            booking_date=booking.booking_date,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            seats=[BookingSeatResponse.model_validate(seat) for seat in seats],
            food_items=food_items,
        )


class BookingCancelResponse(BaseModel):
    success: bool
    message: str
    booking: BookingResponse


class PriceQuoteResponse(BaseModel):
    showtime_id: int
    seat_count: int
    ticket_price: int
    tickets_subtotal: int
    food_subtotal: int
    food_subtotals_by_category: Dict[str, int]
    total: int
