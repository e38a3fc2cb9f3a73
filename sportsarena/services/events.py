"""Event registry: tournaments and maintenance windows shown on the calendar."""

import calendar
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.errors import InvalidRequest, NotFound
from sportsarena.core.principal import Principal, require_staff
from sportsarena.models.event import Event
from sportsarena.schemas import EventIn
from sportsarena.services.booking_rules import local_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventFilter:
    month: int | None = None  # 1-12
    year: int | None = None

    def date_range(self) -> tuple[date, date | None]:
        """First and last day covered; open-ended from today when unfiltered."""
        if self.month is None and self.year is None:
            return local_now().date(), None
        if self.month is None or self.year is None:
            raise InvalidRequest("Month and year must be given together")
        last_day = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, 1), date(self.year, self.month, last_day)


def _check_times(body: EventIn) -> None:
    if body.end_time <= body.start_time:
        raise InvalidRequest("End time must be after start time")


async def get_event(db: AsyncSession, event_id: int) -> Event:
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()
    if event is None:
        raise NotFound("Event not found")
    return event


async def list_events(db: AsyncSession, filters: EventFilter) -> list[Event]:
    start, end = filters.date_range()
    stmt = select(Event).where(Event.event_date >= start)
    if end is not None:
        stmt = stmt.where(Event.event_date <= end)

    result = await db.execute(stmt.order_by(Event.event_date, Event.start_time))
    return list(result.scalars().all())


async def create_event(db: AsyncSession, principal: Principal, body: EventIn) -> Event:
    require_staff(principal, "Unauthorized. Staff access required.")
    _check_times(body)

    event = Event(**body.model_dump())
    db.add(event)
    await db.flush()
    logger.info("Event %s created: %s on %s", event.id, event.title, event.event_date)
    return event


async def update_event(db: AsyncSession, principal: Principal, event_id: int, body: EventIn) -> Event:
    require_staff(principal, "Unauthorized. Staff access required.")
    _check_times(body)

    event = await get_event(db, event_id)
    for field, value in body.model_dump().items():
        setattr(event, field, value)
    await db.flush()
    logger.info("Event %s updated by user %s", event.id, principal.user_id)
    return event


async def delete_event(db: AsyncSession, principal: Principal, event_id: int) -> None:
    require_staff(principal, "Unauthorized. Staff access required.")
    event = await get_event(db, event_id)
    await db.delete(event)
    await db.flush()
    logger.info("Event %s deleted by user %s", event_id, principal.user_id)
