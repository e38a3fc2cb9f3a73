"""Staff moderation: cancel a booking and penalise its user in one step."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.errors import InvalidRequest
from sportsarena.core.principal import Principal, require_staff
from sportsarena.models.booking import Booking
from sportsarena.models.penalty import Penalty
from sportsarena.services.penalties import issue_for_cancellation, issue_for_no_show

ACTION_NO_SHOW = "no-show"
ACTION_CANCEL = "cancel"


@dataclass
class ModerationResult:
    message: str
    booking: Booking
    penalty: Penalty | None

    @property
    def severity(self) -> str:
        return self.penalty.severity.value if self.penalty else "none"


async def moderate_booking(
    db: AsyncSession,
    principal: Principal,
    booking_id: int,
    action: str,
    note: str | None = None,
    penalty_level: str | None = None,
) -> ModerationResult:
    require_staff(principal, "Unauthorized. Staff access required.")

    if action == ACTION_NO_SHOW:
        booking, penalty = await issue_for_no_show(db, principal, booking_id)
        return ModerationResult("Booking cancelled and warning issued", booking, penalty)

    if action == ACTION_CANCEL:
        booking, penalty = await issue_for_cancellation(db, principal, booking_id, note, penalty_level)
        return ModerationResult("Booking cancelled successfully", booking, penalty)

    raise InvalidRequest("Invalid action")
