from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import exists, select

from cinebook.core.pagination import Page
from cinebook.exceptions import InvalidInputError, MovieNotFoundError, ResourceInUseError
from cinebook.models.movie import Movie
from cinebook.models.showtime import Showtime
from cinebook.schemas.movie import MovieCreate, MovieUpdate

# columns a PUT may set to null; null for any other field means "leave as is"
NULLABLE_FIELDS = {"description", "poster_image", "trailer_url"}


class CRUDMovie:
    async def get_movie(self, db: AsyncSession, movie_id: int) -> Movie:
        result = await db.execute(select(Movie).where(Movie.id == movie_id))
        movie = result.scalar_one_or_none()
        if movie is None:
            raise MovieNotFoundError()
        return movie

    async def list_movies(self, db: AsyncSession, page: Page, search: Optional[str] = None,
                          genre: Optional[str] = None, rating: Optional[str] = None):
        stmt = select(Movie)
        if search:
            stmt = stmt.where(Movie.title.ilike(f"%{search}%"))
        if genre:
            stmt = stmt.where(Movie.genre == genre)
        if rating:
            stmt = stmt.where(Movie.rating == rating)
        result = await db.execute(
            stmt.order_by(Movie.created_at.desc(), Movie.id.desc())
            .limit(page.limit)
            .offset(page.offset))
        return result.scalars().all()

    async def create_movie(self, db: AsyncSession, data: MovieCreate) -> Movie:
        movie = Movie(**data.model_dump())
        db.add(movie)
        await db.commit()
        await db.refresh(movie)
        return movie

    async def update_movie(self, db: AsyncSession, movie_id: int, data: MovieUpdate) -> Movie:
        changes = {
            field: value for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not changes:
            raise InvalidInputError("No valid fields to update", code="NO_FIELDS_TO_UPDATE")
        movie = await self.get_movie(db, movie_id)
        for field, value in changes.items():
            setattr(movie, field, value)
        await db.commit()
        await db.refresh(movie)
        return movie

    async def delete_movie(self, db: AsyncSession, movie_id: int) -> Movie:
        movie = await self.get_movie(db, movie_id)
        has_showtimes = await db.scalar(select(exists().where(Showtime.movie_id == movie_id)))
        if has_showtimes:
            raise ResourceInUseError("Movie has scheduled showtimes", code="MOVIE_IN_USE")
        await db.delete(movie)
        await db.commit()
        return movie


crud_movie = CRUDMovie()
