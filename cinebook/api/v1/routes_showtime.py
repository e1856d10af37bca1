from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.core.pagination import Page, pagination
from cinebook.crud.showtime import crud_showtime
from cinebook.db.session import getDB_session
from cinebook.schemas.showtime import ShowtimeCreate, ShowtimeDetailResponse, ShowtimeResponse, ShowtimeUpdate


router = APIRouter(
    prefix="/showtime",
    tags=["showtimes"]
)


@router.get("/", response_model=list[ShowtimeResponse])
async def list_showtimes(
        movie_id: Optional[int] = None,
        show_date: Optional[date] = None,
        screen_number: Optional[int] = None,
        page: Page = Depends(pagination),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_showtime.list_showtimes(
        db, page, movie_id=movie_id, show_date=show_date, screen_number=screen_number)


@router.get("/{showtime_id}", response_model=ShowtimeDetailResponse)
async def get_showtime(showtime_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_showtime.get_showtime(db, showtime_id, with_movie=True)


@router.post("/", response_model=ShowtimeDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_showtime(showtime: ShowtimeCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_showtime.create_showtime(db, showtime)


@router.put("/{showtime_id}", response_model=ShowtimeDetailResponse)
async def update_showtime(showtime_id: int, showtime: ShowtimeUpdate, db: AsyncSession = Depends(getDB_session)):
    return await crud_showtime.update_showtime(db, showtime_id, showtime)


@router.delete("/{showtime_id}", response_model=ShowtimeResponse)
async def delete_showtime(showtime_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_showtime.delete_showtime(db, showtime_id)
