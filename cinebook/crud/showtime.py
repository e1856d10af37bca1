import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import delete, exists, select

from cinebook.core.pagination import Page
from cinebook.exceptions import InvalidInputError, MovieNotFoundError, ResourceInUseError, ShowtimeNotFoundError
from cinebook.models.booking import Booking
from cinebook.models.movie import Movie
from cinebook.models.seat import Seat
from cinebook.models.showtime import Showtime
from cinebook.schemas.showtime import ShowtimeCreate, ShowtimeUpdate
from cinebook.services.seat_layout import generate_seat_grid

logger = logging.getLogger(__name__)


class CRUDShowtime:
    async def get_showtime(self, db: AsyncSession, showtime_id: int, with_movie: bool = False) -> Showtime:
        stmt = select(Showtime).where(Showtime.id == showtime_id)
        if with_movie:
            stmt = stmt.options(selectinload(Showtime.movie))
        result = await db.execute(stmt)
        showtime = result.scalar_one_or_none()
        if showtime is None:
            raise ShowtimeNotFoundError()
        return showtime

    async def list_showtimes(self, db: AsyncSession, page: Page, movie_id: Optional[int] = None,
                             show_date: Optional[date] = None, screen_number: Optional[int] = None):
        stmt = select(Showtime)
        if movie_id is not None:
            stmt = stmt.where(Showtime.movie_id == movie_id)
        if show_date is not None:
            stmt = stmt.where(Showtime.show_date == show_date)
        if screen_number is not None:
            stmt = stmt.where(Showtime.screen_number == screen_number)
        result = await db.execute(
            stmt.order_by(Showtime.created_at.desc(), Showtime.id.desc())
            .limit(page.limit)
            .offset(page.offset))
        return result.scalars().all()

    async def _ensure_movie(self, db: AsyncSession, movie_id: int):
        movie = await db.get(Movie, movie_id)
        if movie is None:
            raise MovieNotFoundError("Movie not found with provided movie_id")

    async def create_showtime(self, db: AsyncSession, data: ShowtimeCreate) -> Showtime:
        """Creates the showtime and its full seat grid in one transaction."""
        try:
            await self._ensure_movie(db, data.movie_id)
            showtime = Showtime(
                **data.model_dump(exclude={"seats_per_row"}),
                available_seats=data.total_seats
            )
            db.add(showtime)
            await db.flush()
            db.add_all([
                Seat(showtime_id=showtime.id, row=row, seat_number=seat_number, is_booked=False)
                for row, seat_number in generate_seat_grid(data.total_seats, data.seats_per_row)
            ])
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Created showtime %s with %s seats", showtime.id, data.total_seats)
        return await self.get_showtime(db, showtime.id, with_movie=True)

    async def update_showtime(self, db: AsyncSession, showtime_id: int, data: ShowtimeUpdate) -> Showtime:
        changes = {field: value for field, value in data.model_dump(exclude_unset=True).items()
                   if value is not None}
        if not changes:
            raise InvalidInputError("No valid fields to update", code="NO_FIELDS_TO_UPDATE")
        showtime = await self.get_showtime(db, showtime_id)
        if "movie_id" in changes:
            await self._ensure_movie(db, changes["movie_id"])
        for field, value in changes.items():
            setattr(showtime, field, value)
        await db.commit()
        # drop the cached instance so the movie relationship reloads
        db.expunge(showtime)
        return await self.get_showtime(db, showtime_id, with_movie=True)

    async def delete_showtime(self, db: AsyncSession, showtime_id: int) -> Showtime:
        showtime = await self.get_showtime(db, showtime_id)
        has_bookings = await db.scalar(select(exists().where(Booking.showtime_id == showtime_id)))
        if has_bookings:
            raise ResourceInUseError("Showtime has bookings", code="SHOWTIME_IN_USE")
        try:
            await db.execute(delete(Seat).where(Seat.showtime_id == showtime_id))
            await db.delete(showtime)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return showtime


crud_showtime = CRUDShowtime()
