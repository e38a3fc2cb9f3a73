"""Booking model.

A booking reserves places on a court for a user at a specific date/time.
Several users may share one slot until the court's capacity is reached.
"""

import enum
from datetime import date, datetime, time

from sqlalchemy import CheckConstraint, Date, DateTime, Enum, ForeignKey, Index, Integer, Time, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sportsarena.models.base import Base, TimestampMixin
from sportsarena.models.court import Court
from sportsarena.models.user import User


class BookingStatus(enum.StrEnum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)
    court_id: Mapped[int] = mapped_column(ForeignKey("courts.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    # When
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    participants: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Status
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", values_callable=lambda e: [x.value for x in e]),
        default=BookingStatus.CONFIRMED,
        nullable=False,
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Relationships
    court: Mapped[Court] = relationship()
    user: Mapped[User] = relationship()

    __table_args__ = (
        CheckConstraint("participants > 0", name="ck_bookings_participants_positive"),
        # One live booking per user per slot; cancelled rows don't count
        Index(
            "ix_bookings_user_slot",
            "court_id",
            "booking_date",
            "start_time",
            "user_id",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
        # Occupancy lookups (the booking grid)
        Index("ix_bookings_court_date", "court_id", "booking_date"),
        # My bookings
        Index("ix_bookings_user", "user_id", "booking_date"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.booking_date} {self.start_time}-{self.end_time} court={self.court_id}>"
