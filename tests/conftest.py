"""Shared test fixtures.

Tests run against a throwaway SQLite file; the schema is rebuilt for every
test that asks for the database.
"""

import os

os.environ.setdefault("SA_DATABASE_URL", "sqlite+aiosqlite:///./test_sportsarena.db")

from datetime import timedelta  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from sportsarena.core.auth import create_access_token  # noqa: E402
from sportsarena.core.database import async_session_factory, engine  # noqa: E402
from sportsarena.main import app  # noqa: E402
from sportsarena.models import Base, Court, Sport, User, UserRole  # noqa: E402
from sportsarena.services.booking_rules import local_now  # noqa: E402


@pytest.fixture
async def db_schema():
    """Fresh tables for one test.

    The global engine is created at import time. pytest-asyncio gives each test
    its own event loop, so pooled connections from the previous loop are
    disposed first.
    """
    await engine.dispose()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client(db_schema):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
async def arena(db_schema):
    """Two students, a staff member, an admin, a squash court (cap 2) and a badminton court (cap 4)."""
    async with async_session_factory() as db:
        student = User(name="Sam Student", email="sam@university.edu", role=UserRole.STUDENT)
        other = User(name="Olu Other", email="olu@university.edu", role=UserRole.STUDENT)
        staff = User(name="Arena Staff", email="staff@sportsarena.com", role=UserRole.STAFF)
        admin = User(name="Arena Admin", email="admin@sportsarena.com", role=UserRole.ADMIN)
        squash = Court(name="Squash Court 1", sport=Sport.SQUASH, court_number=1, max_capacity=2)
        badminton = Court(name="Badminton Court 1", sport=Sport.BADMINTON, court_number=1, max_capacity=4)
        db.add_all([student, other, staff, admin, squash, badminton])
        await db.commit()

        return SimpleNamespace(
            student=student,
            other=other,
            staff=staff,
            admin=admin,
            squash=squash,
            badminton=badminton,
            student_headers=auth_headers(student),
            other_headers=auth_headers(other),
            staff_headers=auth_headers(staff),
            admin_headers=auth_headers(admin),
        )


def slot(hours_ahead: float = 2, court_id: int | None = None, **extra) -> dict:
    """A one-hour booking body starting ``hours_ahead`` from now (local time).

    Starts in the 23:00 hour are pulled back an hour so the slot never
    crosses midnight.
    """
    start = (local_now() + timedelta(hours=hours_ahead)).replace(second=0, microsecond=0)
    if start.hour == 23:
        start -= timedelta(hours=1)
    end = start + timedelta(hours=1)
    body = {
        "booking_date": start.date().isoformat(),
        "start_time": start.strftime("%H:%M"),
        "end_time": end.strftime("%H:%M"),
    }
    if court_id is not None:
        body["court_id"] = court_id
    body.update(extra)
    return body
