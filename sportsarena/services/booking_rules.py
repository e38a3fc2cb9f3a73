"""Booking admission rules.

Each rule returns a BookingViolation describing the problem, or None if the
rule passes. The slot rules are pure; the capacity and duplicate rules read
the current bookings for the slot.
"""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.config import settings
from sportsarena.core.errors import BookingViolation
from sportsarena.models.booking import Booking, BookingStatus
from sportsarena.models.court import Court

LOCAL_TZ = ZoneInfo(settings.timezone)


def local_now() -> datetime:
    return datetime.now(LOCAL_TZ)


def slot_start(booking_date: date, start_time: time) -> datetime:
    """The slot's start as an aware datetime in the arena's timezone."""
    return datetime.combine(booking_date, start_time, tzinfo=LOCAL_TZ)


def validate_slot(
    booking_date: date,
    start_time: time,
    end_time: time,
    now: datetime | None = None,
    window_hours: int | None = None,
) -> list[BookingViolation]:
    """Run the pure slot rules and return a list of violations (empty = valid)."""
    now = now or local_now()
    window_hours = settings.booking_window_hours if window_hours is None else window_hours
    violations: list[BookingViolation] = []

    v = check_time_order(start_time, end_time)
    if v:
        violations.append(v)

    v = check_not_in_past(booking_date, start_time, now)
    if v:
        violations.append(v)

    v = check_admission_window(booking_date, start_time, now, window_hours)
    if v:
        violations.append(v)

    return violations


def check_time_order(start_time: time, end_time: time) -> BookingViolation | None:
    if end_time <= start_time:
        return BookingViolation("time_order", "End time must be after start time")
    return None


def check_not_in_past(booking_date: date, start_time: time, now: datetime) -> BookingViolation | None:
    """Cannot book a slot that has already started."""
    if slot_start(booking_date, start_time) < now:
        return BookingViolation("past_slot", "Cannot book a time slot in the past")
    return None


def check_admission_window(
    booking_date: date, start_time: time, now: datetime, window_hours: int
) -> BookingViolation | None:
    """Slots open for booking at most ``window_hours`` before they start."""
    if slot_start(booking_date, start_time) > now + timedelta(hours=window_hours):
        return BookingViolation(
            "admission_window",
            f"Bookings can only be made up to {window_hours} hours in advance",
        )
    return None


def check_capacity(court: Court, booked: int, requested: int) -> BookingViolation | None:
    """The slot's non-cancelled participants plus this request must fit the court."""
    if booked + requested > court.max_capacity:
        return BookingViolation("capacity", f"Court is full ({booked}/{court.max_capacity} booked)")
    return None


async def booked_participants(db: AsyncSession, court_id: int, booking_date: date, start_time: time) -> int:
    result = await db.execute(
        select(func.coalesce(func.sum(Booking.participants), 0)).where(
            Booking.court_id == court_id,
            Booking.booking_date == booking_date,
            Booking.start_time == start_time,
            Booking.status != BookingStatus.CANCELLED,
        )
    )
    return result.scalar_one()


async def check_duplicate(
    db: AsyncSession, user_id: int, court_id: int, booking_date: date, start_time: time
) -> BookingViolation | None:
    """A user holds at most one live booking per slot."""
    result = await db.execute(
        select(func.count(Booking.id)).where(
            Booking.user_id == user_id,
            Booking.court_id == court_id,
            Booking.booking_date == booking_date,
            Booking.start_time == start_time,
            Booking.status != BookingStatus.CANCELLED,
        )
    )
    if result.scalar_one():
        return duplicate_violation()
    return None


def duplicate_violation() -> BookingViolation:
    return BookingViolation("duplicate", "You already have a booking for this time slot")
