"""Court catalog route."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.database import get_db
from sportsarena.core.dependencies import get_principal
from sportsarena.core.principal import Principal
from sportsarena.models.court import Sport
from sportsarena.schemas import CourtWithBookingsOut
from sportsarena.services.courts import CourtFilter, list_courts

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("", response_model=list[CourtWithBookingsOut], response_model_exclude_none=True)
async def get_courts(
    sport: Sport | None = Query(None),
    query_date: date | None = Query(None, alias="date", description="Annotate with this day's confirmed bookings"),
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await list_courts(db, principal, CourtFilter(sport=sport, booking_date=query_date))
