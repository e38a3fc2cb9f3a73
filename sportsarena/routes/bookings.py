"""Booking routes: create, list, change status, delete, and the occupancy grid."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.database import get_db
from sportsarena.core.dependencies import get_optional_principal, get_principal
from sportsarena.core.principal import Principal
from sportsarena.models.booking import BookingStatus
from sportsarena.schemas import (
    BookingCreate,
    BookingDetailOut,
    BookingOut,
    BookingSlotOut,
    BookingStatusUpdate,
    MessageOut,
)
from sportsarena.services.admission import (
    BookingFilter,
    create_booking,
    delete_booking,
    list_all_bookings,
    list_bookings_for_user,
    list_slot_occupancy,
    update_booking_status,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingDetailOut, status_code=status.HTTP_201_CREATED)
async def create(
    body: BookingCreate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await create_booking(db, principal, body)


@router.get("", response_model=list[BookingOut])
async def list_my_bookings(
    user_id: int | None = Query(None, description="Another user's id (staff only)"),
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await list_bookings_for_user(db, principal, user_id)


@router.get("/all", response_model=list[BookingDetailOut] | list[BookingSlotOut])
async def list_all(
    query_date: date | None = Query(None, alias="date", description="Date in YYYY-MM-DD format"),
    court_id: int | None = Query(None),
    booking_status: BookingStatus | None = Query(None, alias="status"),
    principal: Principal | None = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """With a date: public slot occupancy, no identities. Without: staff listing."""
    filters = BookingFilter(booking_date=query_date, court_id=court_id, status=booking_status)
    if query_date is not None:
        bookings = await list_slot_occupancy(db, filters)
        return [BookingSlotOut.model_validate(b) for b in bookings]

    bookings = await list_all_bookings(db, principal, filters)
    return [BookingDetailOut.model_validate(b) for b in bookings]


@router.patch("/{booking_id}", response_model=BookingOut)
async def update_status(
    booking_id: int,
    body: BookingStatusUpdate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await update_booking_status(db, principal, booking_id, body.status)


@router.delete("/{booking_id}", response_model=MessageOut)
async def delete(
    booking_id: int,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    await delete_booking(db, principal, booking_id)
    return MessageOut(message="Booking deleted successfully")
