from typing import Iterable, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select, update

from cinebook.exceptions import BookingNotFoundError, SeatNotFoundError, ShowtimeNotFoundError
from cinebook.models.booking import Booking
from cinebook.models.seat import Seat
from cinebook.models.showtime import Showtime
from cinebook.schemas.seat import SeatUpdate


class CRUDSeat:
    async def list_seats(self, db: AsyncSession, showtime_id: int) -> List[Seat]:
        if await db.get(Showtime, showtime_id) is None:
            raise ShowtimeNotFoundError()
        result = await db.scalars(
            select(Seat)
            .where(Seat.showtime_id == showtime_id)
            .order_by(Seat.row.asc(), Seat.seat_number.asc()))
        return result.all()

    async def get_seat(self, db: AsyncSession, seat_id: int) -> Seat:
        seat = await db.get(Seat, seat_id)
        if seat is None:
            raise SeatNotFoundError()
        return seat

    async def get_seats_by_ids(self, db: AsyncSession, seat_ids: Iterable[int]) -> List[Seat]:
        result = await db.scalars(select(Seat).where(Seat.id.in_(list(seat_ids))))
        return result.all()

    async def update_seat(self, db: AsyncSession, seat_id: int, data: SeatUpdate) -> Seat:
        """Keeps the showtime's available_seats in step when is_booked flips."""
        seat = await self.get_seat(db, seat_id)
        changes = data.model_dump(exclude_unset=True)
        try:
            if changes.get("booking_id") is not None:
                if await db.get(Booking, changes["booking_id"]) is None:
                    raise BookingNotFoundError()
            is_booked = changes.get("is_booked")
            if is_booked is not None and is_booked != seat.is_booked:
                seat.is_booked = is_booked
                await db.execute(
                    update(Showtime)
                    .where(Showtime.id == seat.showtime_id)
                    .values(available_seats=Showtime.available_seats + (-1 if is_booked else 1))
                    .execution_options(synchronize_session=False)
                )
            if "booking_id" in changes:
                seat.booking_id = changes["booking_id"]
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await db.refresh(seat)
        return seat

    async def mark_booked(self, db: AsyncSession, seat_id: int, booking_id: int) -> bool:
        """
        Flags the seat booked only if it is currently free.
        Returns False when another booking got there first; the caller decides
        whether to roll back. Does not commit.
        """
        result = await db.execute(
            update(Seat)
            .where(Seat.id == seat_id)
            .where(Seat.is_booked.is_(False))
            .values(is_booked=True, booking_id=booking_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def release(self, db: AsyncSession, seat_ids: Iterable[int]) -> int:
        """Frees the seats, leaving booking_id in place. Does not commit."""
        seat_ids = list(seat_ids)
        if not seat_ids:
            return 0
        result = await db.execute(
            update(Seat)
            .where(Seat.id.in_(seat_ids))
            .where(Seat.is_booked.is_(True))
            .values(is_booked=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount


crud_seat = CRUDSeat()
