from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.crud.seat import crud_seat
from cinebook.db.session import getDB_session
from cinebook.schemas.seat import SeatResponse, SeatUpdate

router = APIRouter(
    prefix="/seat",
    tags=["seats"]
)


@router.get("/showtime/{showtime_id}", response_model=list[SeatResponse])
async def list_seats_for_showtime(showtime_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_seat.list_seats(db, showtime_id)


@router.get("/{seat_id}", response_model=SeatResponse)
async def get_seat(seat_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_seat.get_seat(db, seat_id)


@router.put("/{seat_id}", response_model=SeatResponse)
async def update_seat(seat_id: int, seat: SeatUpdate, db: AsyncSession = Depends(getDB_session)):
    return await crud_seat.update_seat(db, seat_id, seat)
