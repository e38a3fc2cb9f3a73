"""Scheduled facility-wide events (tournaments, maintenance windows)."""

from datetime import date, time

from sqlalchemy import Date, Enum, Index, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from sportsarena.models.base import Base, TimestampMixin
from sportsarena.models.court import Sport


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    sport: Mapped[Sport] = mapped_column(
        Enum(Sport, name="sport", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    max_participants: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (Index("ix_events_date", "event_date"),)

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.event_date}>"
