"""User model.

A person with login credentials. The role gates staff-only operations:
students book courts, staff and admins moderate bookings and manage events.
"""

import enum

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from sportsarena.models.base import Base, TimestampMixin


class UserRole(enum.StrEnum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


STAFF_ROLES = (UserRole.STAFF, UserRole.ADMIN)


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False, index=True)
    hashed_password: Mapped[str | None] = mapped_column(String(200))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [x.value for x in e]),
        default=UserRole.STUDENT,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"
