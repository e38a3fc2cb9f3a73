"""A user's own penalties."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.database import get_db
from sportsarena.core.dependencies import get_principal
from sportsarena.core.principal import Principal
from sportsarena.schemas import PenaltyOut
from sportsarena.services.penalties import list_penalties_for_user, penalty_out

router = APIRouter(prefix="/penalties", tags=["penalties"])


@router.get("", response_model=list[PenaltyOut])
async def my_penalties(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return [penalty_out(p) for p in await list_penalties_for_user(db, principal)]
