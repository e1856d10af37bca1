"""
In-progress booking selections kept per user.

The draft is a plain serializable value; every change goes through
``reduce_draft(draft, action)`` which returns a new draft and never mutates
the one passed in. Drafts are stored in redis so a user can resume a booking
from another device until the TTL runs out.
"""
from typing import Annotated, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field
from redis.asyncio import Redis

from cinebook.core.config import get_settings
from cinebook.models.booking import PaymentMethod


class BookingDraft(BaseModel):
    showtime_id: Optional[int] = None
    selected_seat_ids: List[int] = Field(default_factory=list)
    selected_food: Dict[int, int] = Field(default_factory=dict)
    payment_method: Optional[PaymentMethod] = None


class SetShowtime(BaseModel):
    type: Literal["set_showtime"]
    showtime_id: int


class ToggleSeat(BaseModel):
    type: Literal["toggle_seat"]
    seat_id: int


class SetSeats(BaseModel):
    type: Literal["set_seats"]
    seat_ids: List[int]


class UpdateFoodQuantity(BaseModel):
    type: Literal["update_food_quantity"]
    food_id: int
    quantity: int


class SetPaymentMethod(BaseModel):
    type: Literal["set_payment_method"]
    payment_method: PaymentMethod


class ClearDraft(BaseModel):
    type: Literal["clear"]


DraftAction = Annotated[
    Union[SetShowtime, ToggleSeat, SetSeats, UpdateFoodQuantity, SetPaymentMethod, ClearDraft],
    Field(discriminator="type"),
]


def reduce_draft(draft: BookingDraft, action: DraftAction) -> BookingDraft:
    if isinstance(action, SetShowtime):
        if action.showtime_id == draft.showtime_id:
            return draft.model_copy(deep=True)
        # seats and food picked for another showtime no longer apply
        return BookingDraft(showtime_id=action.showtime_id, payment_method=draft.payment_method)

    if isinstance(action, ToggleSeat):
        seats = list(draft.selected_seat_ids)
        if action.seat_id in seats:
            seats.remove(action.seat_id)
        else:
            seats.append(action.seat_id)
        return draft.model_copy(update={"selected_seat_ids": seats}, deep=True)

    if isinstance(action, SetSeats):
        return draft.model_copy(update={"selected_seat_ids": list(dict.fromkeys(action.seat_ids))}, deep=True)

    if isinstance(action, UpdateFoodQuantity):
        food = dict(draft.selected_food)
        if action.quantity <= 0:
            food.pop(action.food_id, None)
        else:
            food[action.food_id] = action.quantity
        return draft.model_copy(update={"selected_food": food}, deep=True)

    if isinstance(action, SetPaymentMethod):
        return draft.model_copy(update={"payment_method": action.payment_method}, deep=True)

    if isinstance(action, ClearDraft):
        return BookingDraft()

    raise ValueError(f"Unknown draft action {action!r}")


class BookingDraftStore:
    def _key(self, user_id: str) -> str:
        return f"booking_draft:{user_id}"

    async def load(self, redis: Redis, user_id: str) -> BookingDraft:
        raw = await redis.get(self._key(user_id))
        if not raw:
            return BookingDraft()
        return BookingDraft.model_validate_json(raw)

    async def save(self, redis: Redis, user_id: str, draft: BookingDraft) -> BookingDraft:
        await redis.set(self._key(user_id), draft.model_dump_json(),
                        ex=get_settings().BOOKING_DRAFT_TTL_SECONDS)
        return draft

    async def apply(self, redis: Redis, user_id: str, action: DraftAction) -> BookingDraft:
        draft = await self.load(redis, user_id)
        return await self.save(redis, user_id, reduce_draft(draft, action))

    async def delete(self, redis: Redis, user_id: str):
        await redis.delete(self._key(user_id))


booking_draft_store = BookingDraftStore()
