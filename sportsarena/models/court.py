"""Court model.

A court is immutable reference data: one physical playing area for a single
sport, with a cap on how many people may play there at once.
"""

import enum

from sqlalchemy import Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sportsarena.models.base import Base, TimestampMixin


class Sport(enum.StrEnum):
    BADMINTON = "badminton"
    TABLE_TENNIS = "table-tennis"
    SQUASH = "squash"


class Court(TimestampMixin, Base):
    __tablename__ = "courts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sport: Mapped[Sport] = mapped_column(
        Enum(Sport, name="sport", values_callable=lambda e: [x.value for x in e]),
        nullable=False,
    )
    court_number: Mapped[int] = mapped_column(Integer, nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index("ix_courts_sport_number", "sport", "court_number", unique=True),)

    def __repr__(self) -> str:
        return f"<Court {self.name} cap={self.max_capacity}>"
