"""Penalty issuance service.

Penalties are created only as a side effect of staff moderating a booking
(see ``services.moderation``). Expiry is informational: nothing flips a
penalty to resolved when ``expires_at`` passes, the API just reports it.
"""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from sportsarena.core.errors import InvalidRequest, NotFound
from sportsarena.core.principal import Principal, require_staff
from sportsarena.models.booking import Booking, BookingStatus
from sportsarena.models.penalty import Penalty, PenaltySeverity, PenaltyStatus
from sportsarena.schemas import PenaltyOut, StaffPenaltyOut, UserSummary
from sportsarena.services.admission import apply_transition, get_booking

logger = logging.getLogger(__name__)

NO_SHOW_REASON = "No Show"
NO_PENALTY = "no-penalty"

EXPIRY_DAYS = {
    PenaltySeverity.LOW: 30,
    PenaltySeverity.MEDIUM: 90,
    PenaltySeverity.HIGH: 90,
}

# Displayed policy only; no booking path enforces these limits
RESTRICTIONS = {
    PenaltySeverity.LOW: "Warning - No booking restrictions",
    PenaltySeverity.MEDIUM: "Maximum 3 bookings per week",
    PenaltySeverity.HIGH: "Maximum 2 bookings per week",
}


def penalty_expiry(severity: PenaltySeverity, issued: datetime) -> datetime:
    return issued + timedelta(days=EXPIRY_DAYS[severity])


def parse_severity(level: str) -> PenaltySeverity:
    try:
        return PenaltySeverity(level)
    except ValueError:
        raise InvalidRequest("Invalid penalty level") from None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def is_expired(penalty: Penalty, now: datetime | None = None) -> bool:
    if penalty.expires_at is None:
        return False
    return _as_utc(penalty.expires_at) <= (now or datetime.now(UTC))


def penalty_out(penalty: Penalty) -> PenaltyOut:
    severity = PenaltySeverity(penalty.severity)
    return PenaltyOut(
        id=penalty.id,
        user_id=penalty.user_id,
        booking_id=penalty.booking_id,
        reason=penalty.reason,
        severity=severity.value,
        status=PenaltyStatus(penalty.status).value,
        issued_date=penalty.issued_date,
        expires_at=penalty.expires_at,
        restriction=RESTRICTIONS[severity],
        is_expired=is_expired(penalty),
    )


def staff_penalty_out(penalty: Penalty) -> StaffPenaltyOut:
    return StaffPenaltyOut(
        **penalty_out(penalty).model_dump(),
        user=UserSummary.model_validate(penalty.user),
    )


async def issue_penalty(
    db: AsyncSession,
    booking: Booking,
    reason: str,
    severity: PenaltySeverity,
) -> Penalty:
    """Record an active penalty against the booking's user."""
    issued = datetime.now(UTC)
    penalty = Penalty(
        user_id=booking.user_id,
        booking_id=booking.id,
        reason=reason,
        severity=severity,
        status=PenaltyStatus.ACTIVE,
        issued_date=issued,
        expires_at=penalty_expiry(severity, issued),
    )
    db.add(penalty)
    await db.flush()

    logger.info(
        "Penalty %s issued: user=%s booking=%s severity=%s",
        penalty.id,
        booking.user_id,
        booking.id,
        severity,
    )
    return penalty


async def _load_confirmed_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await get_booking(db, booking_id, lock=True)
    if booking.status != BookingStatus.CONFIRMED:
        raise InvalidRequest("Only confirmed bookings can be modified")
    return booking


async def issue_for_no_show(
    db: AsyncSession, principal: Principal, booking_id: int
) -> tuple[Booking, Penalty]:
    """Cancel a confirmed booking whose user never turned up and issue a warning."""
    require_staff(principal, "Unauthorized. Staff access required.")
    booking = await _load_confirmed_booking(db, booking_id)

    apply_transition(booking, BookingStatus.CANCELLED, principal)
    penalty = await issue_penalty(db, booking, NO_SHOW_REASON, PenaltySeverity.LOW)
    return booking, penalty


async def issue_for_cancellation(
    db: AsyncSession,
    principal: Principal,
    booking_id: int,
    note: str | None,
    penalty_level: str | None = None,
) -> tuple[Booking, Penalty | None]:
    """Cancel a confirmed booking on staff's behalf, optionally with a penalty.

    ``penalty_level`` of None or "no-penalty" cancels without penalising.
    """
    require_staff(principal, "Unauthorized. Staff access required.")
    booking = await _load_confirmed_booking(db, booking_id)

    if not note or not note.strip():
        raise InvalidRequest("Cancellation note is required")
    severity = None
    if penalty_level and penalty_level != NO_PENALTY:
        severity = parse_severity(penalty_level)

    apply_transition(booking, BookingStatus.CANCELLED, principal)

    penalty = None
    if severity is not None:
        penalty = await issue_penalty(db, booking, note, severity)
    else:
        await db.flush()
    return booking, penalty


async def set_penalty_status(
    db: AsyncSession, principal: Principal, penalty_id: int, new_status: str
) -> Penalty:
    require_staff(principal, "Unauthorized. Staff access required.")
    try:
        status = PenaltyStatus(new_status)
    except ValueError:
        raise InvalidRequest("Invalid status. Must be 'active' or 'resolved'") from None

    result = await db.execute(select(Penalty).where(Penalty.id == penalty_id).with_for_update())
    penalty = result.scalar_one_or_none()
    if penalty is None:
        raise NotFound("Penalty not found")

    penalty.status = status
    await db.flush()
    logger.info("Penalty %s set to %s by user %s", penalty.id, status, principal.user_id)
    return penalty


async def list_penalties_for_user(db: AsyncSession, principal: Principal) -> list[Penalty]:
    result = await db.execute(
        select(Penalty)
        .where(Penalty.user_id == principal.user_id)
        .order_by(Penalty.issued_date.desc(), Penalty.id.desc())
    )
    return list(result.scalars().all())


async def list_all_penalties(db: AsyncSession, principal: Principal) -> list[Penalty]:
    require_staff(principal, "Unauthorized. Staff access required.")
    result = await db.execute(
        select(Penalty)
        .options(selectinload(Penalty.user))
        .order_by(Penalty.issued_date.desc(), Penalty.id.desc())
    )
    return list(result.scalars().all())
