"""Penalty model.

Penalties are issued to a user as a side effect of staff moderating one of
their bookings. Severity sets the expiry and the (advisory) booking
restriction shown to the user.
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sportsarena.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from sportsarena.models.booking import Booking
    from sportsarena.models.user import User


class PenaltySeverity(enum.StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PenaltyStatus(enum.StrEnum):
    ACTIVE = "active"
    RESOLVED = "resolved"


class Penalty(TimestampMixin, Base):
    __tablename__ = "penalties"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    booking_id: Mapped[int | None] = mapped_column(ForeignKey("bookings.id", ondelete="SET NULL"))
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[PenaltySeverity] = mapped_column(
        Enum(PenaltySeverity, name="penalty_severity", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    status: Mapped[PenaltyStatus] = mapped_column(
        Enum(PenaltyStatus, name="penalty_status", values_callable=lambda e: [x.value for x in e]),
        default=PenaltyStatus.ACTIVE,
        nullable=False,
    )
    issued_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Relationships
    user: Mapped["User"] = relationship(lazy="raise")
    booking: Mapped["Booking | None"] = relationship(lazy="raise")

    __table_args__ = (Index("ix_penalties_user_issued", "user_id", "issued_date"),)

    def __repr__(self) -> str:
        return f"<Penalty {self.severity.value} {self.status.value} user={self.user_id}>"
