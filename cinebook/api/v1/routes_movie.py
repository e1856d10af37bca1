from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.core.pagination import Page, pagination
from cinebook.crud.movie import crud_movie
from cinebook.db.session import getDB_session
from cinebook.schemas.movie import MovieCreate, MovieResponse, MovieUpdate

router = APIRouter(
    prefix="/movie",
    tags=["movies"]
)


@router.get("/", response_model=list[MovieResponse])
async def list_movies(
        search: Optional[str] = None,
        genre: Optional[str] = None,
        rating: Optional[str] = None,
        page: Page = Depends(pagination),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.list_movies(db, page, search=search, genre=genre, rating=rating)


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.get_movie(db, movie_id)


@router.post("/", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(movie: MovieCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.create_movie(db, movie)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(movie_id: int, movie: MovieUpdate, db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.update_movie(db=db, movie_id=movie_id, data=movie)


@router.delete("/{movie_id}", response_model=MovieResponse)
async def delete_movie(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.delete_movie(db, movie_id)
