import logging
from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select, select, update

from cinebook.core.auth import CurrentUser
from cinebook.core.pagination import Page
from cinebook.crud.food_item import crud_food_item
from cinebook.crud.seat import crud_seat
from cinebook.crud.showtime import crud_showtime
from cinebook.exceptions import (
    BookingAlreadyCancelledError,
    BookingNotFoundError,
    CineBookError,
    FoodItemNotFoundError,
    InvalidInputError,
    SeatAlreadyBookedError,
    SeatNotFoundError,
)
from cinebook.models.booking import Booking, BookingStatus
from cinebook.models.booking_food import BookingFood
from cinebook.models.booking_seat import BookingSeat
from cinebook.models.seat import Seat
from cinebook.models.showtime import Showtime
from cinebook.schemas.booking import BookingCreate, BookingQuoteRequest, BookingResponse, PriceQuoteResponse
from cinebook.services.pricing import FoodLine, price_booking

logger = logging.getLogger(__name__)


def _with_line_items(stmt: Select) -> Select:
    return stmt.options(
        selectinload(Booking.seat_links).selectinload(BookingSeat.seat),
        selectinload(Booking.food_lines).selectinload(BookingFood.food_item),
    )


class CRUDBooking:

    async def _resolve_seats(self, db: AsyncSession, showtime: Showtime, seat_ids: List[int]) -> List[Seat]:
        """Seats in request order; all must exist, belong to the showtime and be free."""
        seats_by_id = {seat.id: seat for seat in await crud_seat.get_seats_by_ids(db, seat_ids)}
        missing = [seat_id for seat_id in seat_ids if seat_id not in seats_by_id]
        if missing:
            raise SeatNotFoundError(f"Seats not found: {', '.join(map(str, missing))}")
        seats = [seats_by_id[seat_id] for seat_id in seat_ids]
        foreign = [seat.id for seat in seats if seat.showtime_id != showtime.id]
        if foreign:
            raise InvalidInputError(
                f"Seats {', '.join(map(str, foreign))} do not belong to showtime {showtime.id}",
                code="SEAT_SHOWTIME_MISMATCH")
        booked = [seat.label for seat in seats if seat.is_booked]
        if booked:
            raise SeatAlreadyBookedError(booked)
        return seats

    async def _resolve_food(self, db: AsyncSession, food_items: Dict[int, int]) -> List[FoodLine]:
        catalog = await crud_food_item.get_food_items_by_ids(db, food_items.keys())
        lines = []
        for food_item_id, quantity in food_items.items():
            food_item = catalog.get(food_item_id)
            if food_item is None:
                raise FoodItemNotFoundError(f"Food item {food_item_id} not found")
            if not food_item.available:
                raise InvalidInputError(f"{food_item.name} is not available", code="FOOD_ITEM_UNAVAILABLE")
            lines.append(FoodLine(
                food_item_id=food_item.id,
                name=food_item.name,
                category=food_item.category,
                unit_price=food_item.price,
                quantity=quantity,
            ))
        return lines

    async def quote(self, db: AsyncSession, data: BookingQuoteRequest) -> PriceQuoteResponse:
        showtime = await crud_showtime.get_showtime(db, data.showtime_id)
        seats = await self._resolve_seats(db, showtime, data.seat_ids)
        food_lines = await self._resolve_food(db, data.food_items)
        breakdown = price_booking(len(seats), showtime.price, food_lines)
        return PriceQuoteResponse(
            showtime_id=showtime.id,
            seat_count=breakdown.seat_count,
            ticket_price=breakdown.ticket_price,
            tickets_subtotal=breakdown.tickets_subtotal,
            food_subtotal=breakdown.food_subtotal,
            food_subtotals_by_category=breakdown.food_subtotals_by_category,
            total=breakdown.total,
        )

    # .1 resolve the showtime, seats and food items. the db is the source of truth.
    # .2 price the booking.
    # .3 create the booking.
    # .4 flag each seat booked only if it is still free, collect the ones taken meanwhile and abort if any.
    # .5 add the seat and food line items.
    # .6 move the showtime's available seat counter.
    # .7 commit, or roll everything back on any failure.
    async def create_booking(self, db: AsyncSession, user: CurrentUser, data: BookingCreate) -> BookingResponse:
        try:
            showtime = await crud_showtime.get_showtime(db, data.showtime_id)
            seats = await self._resolve_seats(db, showtime, data.seat_ids)
            food_lines = await self._resolve_food(db, data.food_items)
            breakdown = price_booking(len(seats), showtime.price, food_lines)

            booking = Booking(
                user_id=user.id,
                showtime_id=showtime.id,
                total_seats=breakdown.seat_count,
                ticket_price=showtime.price,
                total_amount=breakdown.total,
                payment_method=data.payment_method,
                status=BookingStatus.CONFIRMED,
            )
            db.add(booking)
            await db.flush()

            taken = []
            for seat in seats:
                if not await crud_seat.mark_booked(db, seat.id, booking.id):
                    taken.append(seat.label)
            if taken:
                raise SeatAlreadyBookedError(taken)

            db.add_all([BookingSeat(booking_id=booking.id, seat_id=seat.id) for seat in seats])
            db.add_all([
                BookingFood(
                    booking_id=booking.id,
                    food_item_id=line.food_item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price)
                for line in food_lines
            ])
            await db.execute(
                update(Showtime)
                .where(Showtime.id == showtime.id)
                .values(available_seats=Showtime.available_seats - len(seats))
                .execution_options(synchronize_session=False)
            )
            await db.commit()
            booking_id = booking.id
        except CineBookError:
            await db.rollback()
            raise
        except Exception as e:
            logger.error(f"Failed to create booking: {e}", exc_info=True)
            await db.rollback()
            raise

        logger.info("Booking %s confirmed for user %s: %s seats, total %s",
                    booking_id, user.id, breakdown.seat_count, breakdown.total)
        # seat rows were changed behind the identity map's back
        db.expunge_all()
        return await self.get_booking(db, user, booking_id)

    async def get_booking(self, db: AsyncSession, user: CurrentUser, booking_id: int) -> BookingResponse:
        """Owners see their own bookings, admins see any."""
        stmt = select(Booking).where(Booking.id == booking_id)
        if not user.is_admin:
            stmt = stmt.where(Booking.user_id == user.id)
        result = await db.execute(_with_line_items(stmt))
        booking = result.scalar_one_or_none()
        if booking is None:
            raise BookingNotFoundError()
        return BookingResponse.from_booking(booking)

    async def _list(self, db: AsyncSession, stmt: Select, page: Page) -> List[BookingResponse]:
        result = await db.execute(_with_line_items(
            stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(page.limit)
            .offset(page.offset)))
        return [BookingResponse.from_booking(booking) for booking in result.scalars().all()]

    async def list_my_bookings(self, db: AsyncSession, user: CurrentUser, page: Page,
                               status: Optional[BookingStatus] = None) -> List[BookingResponse]:
        stmt = select(Booking).where(Booking.user_id == user.id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        return await self._list(db, stmt, page)

    async def list_bookings(self, db: AsyncSession, page: Page, status: Optional[BookingStatus] = None,
                            user_id: Optional[str] = None) -> List[BookingResponse]:
        stmt = select(Booking)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        if user_id:
            stmt = stmt.where(Booking.user_id == user_id)
        return await self._list(db, stmt, page)

    async def cancel_booking(self, db: AsyncSession, user: CurrentUser, booking_id: int) -> BookingResponse:
        try:
            result = await db.execute(
                select(Booking.status, Booking.showtime_id)
                .where(Booking.id == booking_id)
                .where(Booking.user_id == user.id))
            row = result.first()
            if row is None:
                raise BookingNotFoundError()
            if row.status == BookingStatus.CANCELLED:
                raise BookingAlreadyCancelledError()

            # only one of two racing cancellations flips the status
            cancelled = await db.execute(
                update(Booking)
                .where(Booking.id == booking_id)
                .where(Booking.status == BookingStatus.CONFIRMED)
                .values(status=BookingStatus.CANCELLED)
                .execution_options(synchronize_session=False)
            )
            if cancelled.rowcount != 1:
                raise BookingAlreadyCancelledError()

            seat_ids = (await db.scalars(
                select(BookingSeat.seat_id).where(BookingSeat.booking_id == booking_id))).all()
            released = await crud_seat.release(db, seat_ids)
            if released:
                await db.execute(
                    update(Showtime)
                    .where(Showtime.id == row.showtime_id)
                    .values(available_seats=Showtime.available_seats + released)
                    .execution_options(synchronize_session=False)
                )
            await db.commit()
        except CineBookError:
            await db.rollback()
            raise
        except Exception as e:
            logger.error(f"Failed to cancel booking {booking_id}: {e}", exc_info=True)
            await db.rollback()
            raise

        logger.info("Booking %s cancelled by user %s, released %s seats", booking_id, user.id, released)
        db.expunge_all()
        return await self.get_booking(db, user, booking_id)


crud_booking = CRUDBooking()
