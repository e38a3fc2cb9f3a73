"""Booking admission service: create, change status, delete and list bookings.

Every operation takes the request principal explicitly. Validation failures
raise before anything is written; the request transaction rolls back on any
error, so a rejected booking never leaves a partial row behind.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from sportsarena.core.errors import InvalidRequest, NotFound, PermissionDenied
from sportsarena.core.principal import Principal, require_owner_or_staff, require_staff
from sportsarena.models.booking import Booking, BookingStatus
from sportsarena.models.court import Court
from sportsarena.schemas import BookingCreate
from sportsarena.services.booking_rules import (
    booked_participants,
    check_capacity,
    check_duplicate,
    duplicate_violation,
    validate_slot,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingFilter:
    booking_date: date | None = None
    court_id: int | None = None
    status: BookingStatus | None = None


# (from, to) -> whether only staff may drive the change
_TRANSITIONS: dict[tuple[BookingStatus, BookingStatus], bool] = {
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED): False,
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED): True,
}


def _booking_query():
    return select(Booking).options(selectinload(Booking.court), selectinload(Booking.user))


async def get_booking(db: AsyncSession, booking_id: int, lock: bool = False) -> Booking:
    """Load a booking with its court and user, optionally locking the row."""
    stmt = _booking_query().where(Booking.id == booking_id).execution_options(populate_existing=True)
    if lock:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFound("Booking not found")
    return booking


async def create_booking(
    db: AsyncSession,
    principal: Principal,
    body: BookingCreate,
    now: datetime | None = None,
) -> Booking:
    # Lock the court row first: concurrent admissions to the same court wait
    # here, so the capacity sum below cannot be read stale
    result = await db.execute(select(Court).where(Court.id == body.court_id).with_for_update())
    court = result.scalar_one_or_none()
    if court is None:
        raise NotFound("Court not found")

    violations = validate_slot(body.booking_date, body.start_time, body.end_time, now=now)
    if violations:
        raise violations[0]

    v = await check_duplicate(db, principal.user_id, court.id, body.booking_date, body.start_time)
    if v:
        raise v

    booked = await booked_participants(db, court.id, body.booking_date, body.start_time)
    v = check_capacity(court, booked, body.participants)
    if v:
        raise v

    booking = Booking(
        court_id=court.id,
        user_id=principal.user_id,
        booking_date=body.booking_date,
        start_time=body.start_time,
        end_time=body.end_time,
        participants=body.participants,
        status=BookingStatus.CONFIRMED,
    )
    db.add(booking)
    try:
        await db.flush()
    except IntegrityError:
        raise duplicate_violation() from None

    logger.info(
        "Booking %s created: court=%s %s %s participants=%s (%s/%s)",
        booking.id,
        court.id,
        body.booking_date,
        body.start_time.strftime("%H:%M"),
        body.participants,
        booked + body.participants,
        court.max_capacity,
    )
    return await get_booking(db, booking.id)


def apply_transition(booking: Booking, new_status: BookingStatus, principal: Principal) -> None:
    """Move a booking to ``new_status`` if the transition is allowed for the principal."""
    staff_only = _TRANSITIONS.get((booking.status, new_status))
    if staff_only is None:
        raise InvalidRequest(f"Cannot change booking from {booking.status.value} to {new_status.value}")
    if staff_only and not principal.is_staff:
        raise PermissionDenied(f"Only staff can mark a booking as {new_status.value}")

    booking.status = new_status
    if new_status == BookingStatus.CANCELLED:
        booking.cancelled_at = datetime.now(UTC)


async def update_booking_status(
    db: AsyncSession,
    principal: Principal,
    booking_id: int,
    new_status: BookingStatus,
) -> Booking:
    booking = await get_booking(db, booking_id, lock=True)
    require_owner_or_staff(principal, booking.user_id, "Unauthorized to modify this booking")

    old_status = booking.status
    apply_transition(booking, new_status, principal)
    await db.flush()

    logger.info("Booking %s: %s -> %s by user %s", booking.id, old_status, new_status, principal.user_id)
    return booking


async def delete_booking(db: AsyncSession, principal: Principal, booking_id: int) -> None:
    booking = await get_booking(db, booking_id, lock=True)
    require_owner_or_staff(principal, booking.user_id, "Unauthorized to delete this booking")

    await db.delete(booking)
    await db.flush()
    logger.info("Booking %s deleted by user %s", booking_id, principal.user_id)


async def list_bookings_for_user(
    db: AsyncSession, principal: Principal, user_id: int | None = None
) -> list[Booking]:
    """A user's bookings, newest first. Other users' bookings need staff."""
    target = principal.user_id if user_id is None else user_id
    if not principal.owns(target):
        require_staff(principal, "Unauthorized to view these bookings")

    result = await db.execute(
        _booking_query()
        .where(Booking.user_id == target)
        .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
    )
    return list(result.scalars().all())


async def list_slot_occupancy(db: AsyncSession, filters: BookingFilter) -> list[Booking]:
    """Non-cancelled bookings on one day, for the public occupancy grid."""
    if filters.booking_date is None:
        raise InvalidRequest("A date is required for slot occupancy")

    stmt = select(Booking).where(
        Booking.booking_date == filters.booking_date,
        Booking.status != BookingStatus.CANCELLED,
    )
    if filters.court_id is not None:
        stmt = stmt.where(Booking.court_id == filters.court_id)

    result = await db.execute(stmt.order_by(Booking.court_id, Booking.start_time))
    return list(result.scalars().all())


async def list_all_bookings(
    db: AsyncSession, principal: Principal | None, filters: BookingFilter
) -> list[Booking]:
    """Every booking with user and court, newest first. Staff only."""
    require_staff(principal, "Unauthorized. Staff access required.")

    stmt = _booking_query()
    if filters.booking_date is not None:
        stmt = stmt.where(Booking.booking_date == filters.booking_date)
    if filters.court_id is not None:
        stmt = stmt.where(Booking.court_id == filters.court_id)
    if filters.status is not None:
        stmt = stmt.where(Booking.status == filters.status)

    result = await db.execute(stmt.order_by(Booking.booking_date.desc(), Booking.start_time.desc()))
    return list(result.scalars().all())
