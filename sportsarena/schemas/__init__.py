"""Pydantic schemas for API serialisation."""

import re
from datetime import date, datetime, time
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, PlainSerializer

from sportsarena.models.booking import BookingStatus
from sportsarena.models.court import Sport

# Wall-clock times travel as zero-padded "HH:MM"
ClockTime = Annotated[time, PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str)]

_HHMM = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


def _parse_clock(value: object) -> time:
    # Slots are keyed on the exact start time, so seconds and offsets are refused
    if isinstance(value, str) and _HHMM.fullmatch(value):
        return time(int(value[:2]), int(value[3:]))
    raise ValueError("must be a time in HH:MM format")


ClockTimeIn = Annotated[time, BeforeValidator(_parse_clock)]


# --- Auth ---


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=6)


class RefreshRequest(BaseModel):
    refresh_token: str


# --- User ---


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


# --- Court ---


class CourtOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    sport: str
    court_number: int
    max_capacity: int


class BookingSlotOut(BaseModel):
    """Occupancy of a slot without anything that identifies who booked it."""

    model_config = ConfigDict(from_attributes=True)

    court_id: int
    booking_date: date
    start_time: ClockTime
    end_time: ClockTime
    participants: int


class CourtWithBookingsOut(CourtOut):
    bookings: list[BookingSlotOut] | None = None


# --- Booking ---


class BookingCreate(BaseModel):
    court_id: int
    booking_date: date
    start_time: ClockTimeIn
    end_time: ClockTimeIn
    participants: int = Field(default=1, ge=1)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    court_id: int
    user_id: int
    booking_date: date
    start_time: ClockTime
    end_time: ClockTime
    participants: int
    status: str
    cancelled_at: datetime | None
    created_at: datetime
    court: CourtOut


class BookingDetailOut(BookingOut):
    user: UserSummary


class MessageOut(BaseModel):
    message: str


# --- Event ---


class EventIn(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    sport: Sport
    event_date: date
    start_time: ClockTimeIn
    end_time: ClockTimeIn
    location: str = Field(min_length=1, max_length=200)
    max_participants: int | None = Field(default=None, ge=1)


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    sport: str
    event_date: date
    start_time: ClockTime
    end_time: ClockTime
    location: str
    max_participants: int | None


# --- Penalty ---


class PenaltyOut(BaseModel):
    id: int
    user_id: int
    booking_id: int | None
    reason: str
    severity: str
    status: str
    issued_date: datetime
    expires_at: datetime | None
    restriction: str
    is_expired: bool


class StaffPenaltyOut(PenaltyOut):
    user: UserSummary


class PenaltyStatusUpdate(BaseModel):
    penalty_id: int
    status: str


class PenaltyStatusOut(BaseModel):
    message: str
    penalty: PenaltyOut


# --- Staff moderation ---


class ManageBookingRequest(BaseModel):
    booking_id: int
    action: str
    note: str | None = None
    penalty_level: str | None = None


class ManageBookingOut(BaseModel):
    message: str
    severity: str
    booking: BookingOut
    penalty: PenaltyOut | None
