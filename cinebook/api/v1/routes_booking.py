from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from cinebook.core.auth import CurrentUser, get_current_user, require_admin
from cinebook.core.idempotency import check_idempotency, save_idempotent_response
from cinebook.core.pagination import Page, pagination
from cinebook.crud.booking import crud_booking
from cinebook.db.session import getDB_session
from cinebook.models.booking import BookingStatus
from cinebook.redis import get_redis
from cinebook.schemas.booking import (
    BookingCancelResponse,
    BookingCreate,
    BookingQuoteRequest,
    BookingResponse,
    PriceQuoteResponse,
)
from cinebook.services.booking_draft import BookingDraft, DraftAction, booking_draft_store

router = APIRouter(
    prefix="/booking",
    tags=["bookings"]
)

IDEMPOTENCY_SCOPE = "booking"


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
        data: BookingCreate,
        request: Request,
        user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(getDB_session),
        redis: Redis = Depends(get_redis)):
    idem_key, cached, is_repeat = await check_idempotency(request, redis, IDEMPOTENCY_SCOPE, user.id)
    if is_repeat:
        return cached
    booking = await crud_booking.create_booking(db, user, data)
    if idem_key:
        await save_idempotent_response(redis, IDEMPOTENCY_SCOPE, user.id, idem_key, booking.model_dump(mode="json"))
    return booking


@router.post("/quote", response_model=PriceQuoteResponse)
async def quote_booking(data: BookingQuoteRequest, db: AsyncSession = Depends(getDB_session)):
    return await crud_booking.quote(db, data)


@router.get("/me", response_model=list[BookingResponse])
async def list_my_bookings(
        status: Optional[BookingStatus] = None,
        page: Page = Depends(pagination),
        user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_booking.list_my_bookings(db, user, page, status=status)


@router.get("/all", response_model=list[BookingResponse])
async def list_all_bookings(
        status: Optional[BookingStatus] = None,
        user_id: Optional[str] = None,
        page: Page = Depends(pagination),
        admin: CurrentUser = Depends(require_admin),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_booking.list_bookings(db, page, status=status, user_id=user_id)


@router.get("/draft", response_model=BookingDraft)
async def get_booking_draft(
        user: CurrentUser = Depends(get_current_user),
        redis: Redis = Depends(get_redis)):
    return await booking_draft_store.load(redis, user.id)


@router.post("/draft/actions", response_model=BookingDraft)
async def apply_booking_draft_action(
        action: DraftAction,
        user: CurrentUser = Depends(get_current_user),
        redis: Redis = Depends(get_redis)):
    return await booking_draft_store.apply(redis, user.id, action)


@router.delete("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking_draft(
        user: CurrentUser = Depends(get_current_user),
        redis: Redis = Depends(get_redis)):
    await booking_draft_store.delete(redis, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
        booking_id: int,
        user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_booking.get_booking(db, user, booking_id)


@router.post("/{booking_id}/cancel", response_model=BookingCancelResponse)
async def cancel_booking(
        booking_id: int,
        user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(getDB_session)):
    booking = await crud_booking.cancel_booking(db, user, booking_id)
    return BookingCancelResponse(success=True, message="Booking cancelled successfully", booking=booking)
