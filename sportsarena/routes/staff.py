"""Staff routes: penalty administration and booking moderation."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.database import get_db
from sportsarena.core.dependencies import get_principal
from sportsarena.core.principal import Principal
from sportsarena.schemas import (
    BookingOut,
    ManageBookingOut,
    ManageBookingRequest,
    PenaltyStatusOut,
    PenaltyStatusUpdate,
    StaffPenaltyOut,
)
from sportsarena.services.moderation import moderate_booking
from sportsarena.services.penalties import list_all_penalties, penalty_out, set_penalty_status, staff_penalty_out

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("/penalties", response_model=list[StaffPenaltyOut])
async def list_penalties(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return [staff_penalty_out(p) for p in await list_all_penalties(db, principal)]


@router.patch("/penalties", response_model=PenaltyStatusOut)
async def update_penalty_status(
    body: PenaltyStatusUpdate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    penalty = await set_penalty_status(db, principal, body.penalty_id, body.status)
    return PenaltyStatusOut(message="Penalty status updated successfully", penalty=penalty_out(penalty))


@router.post("/manage-booking", response_model=ManageBookingOut)
async def manage_booking(
    body: ManageBookingRequest,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Mark a booking as a no-show or cancel it with a note, penalising as requested."""
    result = await moderate_booking(
        db,
        principal,
        booking_id=body.booking_id,
        action=body.action,
        note=body.note,
        penalty_level=body.penalty_level,
    )
    return ManageBookingOut(
        message=result.message,
        severity=result.severity,
        booking=BookingOut.model_validate(result.booking),
        penalty=penalty_out(result.penalty) if result.penalty else None,
    )
