"""All models imported here so Base.metadata sees every table."""

from sportsarena.models.base import Base
from sportsarena.models.booking import Booking, BookingStatus
from sportsarena.models.court import Court, Sport
from sportsarena.models.event import Event
from sportsarena.models.penalty import Penalty, PenaltySeverity, PenaltyStatus
from sportsarena.models.user import STAFF_ROLES, User, UserRole

__all__ = [
    "Base",
    "User",
    "UserRole",
    "STAFF_ROLES",
    "Court",
    "Sport",
    "Booking",
    "BookingStatus",
    "Event",
    "Penalty",
    "PenaltySeverity",
    "PenaltyStatus",
]
