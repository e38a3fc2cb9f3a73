"""Event routes: public reads, staff-only writes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.database import get_db
from sportsarena.core.dependencies import get_principal
from sportsarena.core.principal import Principal
from sportsarena.schemas import EventIn, EventOut, MessageOut
from sportsarena.services import events as event_service
from sportsarena.services.events import EventFilter

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventOut])
async def list_events(
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None, ge=1970, le=9999),
    db: AsyncSession = Depends(get_db),
):
    """Events in the given month, or every event from today onward."""
    return await event_service.list_events(db, EventFilter(month=month, year=year))


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventIn,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.create_event(db, principal, body)


@router.get("/{event_id}", response_model=EventOut)
async def get_event(event_id: int, db: AsyncSession = Depends(get_db)):
    return await event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: int,
    body: EventIn,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.update_event(db, principal, event_id, body)


@router.delete("/{event_id}", response_model=MessageOut)
async def delete_event(
    event_id: int,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    await event_service.delete_event(db, principal, event_id)
    return MessageOut(message="Event deleted successfully")
