"""Court catalog, optionally annotated with one day's confirmed bookings."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.principal import Principal, require_role
from sportsarena.models.booking import Booking, BookingStatus
from sportsarena.models.court import Court, Sport
from sportsarena.models.user import UserRole
from sportsarena.schemas import BookingSlotOut, CourtOut, CourtWithBookingsOut


@dataclass(frozen=True)
class CourtFilter:
    sport: Sport | None = None
    booking_date: date | None = None


async def list_courts(db: AsyncSession, principal: Principal, filters: CourtFilter) -> list[CourtWithBookingsOut]:
    require_role(principal, UserRole)

    stmt = select(Court)
    if filters.sport is not None:
        stmt = stmt.where(Court.sport == filters.sport)
    result = await db.execute(stmt.order_by(Court.sport, Court.court_number))
    courts = result.scalars().all()

    if filters.booking_date is None:
        return [CourtWithBookingsOut(**CourtOut.model_validate(c).model_dump()) for c in courts]

    # All confirmed bookings for these courts on this date in one query
    court_ids = [c.id for c in courts]
    bookings_result = await db.execute(
        select(Booking)
        .where(
            Booking.court_id.in_(court_ids),
            Booking.booking_date == filters.booking_date,
            Booking.status == BookingStatus.CONFIRMED,
        )
        .order_by(Booking.start_time)
    )
    bookings_by_court: dict[int, list[BookingSlotOut]] = {cid: [] for cid in court_ids}
    for booking in bookings_result.scalars().all():
        bookings_by_court[booking.court_id].append(BookingSlotOut.model_validate(booking))

    return [
        CourtWithBookingsOut(**CourtOut.model_validate(c).model_dump(), bookings=bookings_by_court[c.id])
        for c in courts
    ]
