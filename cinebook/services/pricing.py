from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable


@dataclass(frozen=True)
class FoodLine:
    food_item_id: int
    name: str
    category: str
    unit_price: int
    quantity: int

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PriceBreakdown:
    seat_count: int
    ticket_price: int
    tickets_subtotal: int
    food_subtotal: int
    total: int
    food_subtotals_by_category: Dict[str, int] = field(default_factory=dict)


def price_booking(seat_count: int, ticket_price: int, food_lines: Iterable[FoodLine]) -> PriceBreakdown:
    """
    total = seat_count * ticket_price + sum(unit_price * quantity).
    Ticket bookings carry no tax or fees.
    """
    if seat_count < 0:
        raise ValueError("seat_count cannot be negative")
    tickets_subtotal = seat_count * ticket_price
    by_category: Dict[str, int] = defaultdict(int)
    for line in food_lines:
        if line.quantity <= 0:
            raise ValueError(f"Quantity for food item {line.food_item_id} must be positive")
        by_category[line.category] += line.line_total
    food_subtotal = sum(by_category.values())
    return PriceBreakdown(
        seat_count=seat_count,
        ticket_price=ticket_price,
        tickets_subtotal=tickets_subtotal,
        food_subtotal=food_subtotal,
        total=tickets_subtotal + food_subtotal,
        food_subtotals_by_category=dict(by_category),
    )
