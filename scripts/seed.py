"""Seed the database with the arena's courts, staff accounts and sample events.

Run with: python -m scripts.seed
Idempotent: existing users, courts and events (matched by email, sport/number
and title) are left alone.
"""

import asyncio
from datetime import time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sportsarena.core.auth import hash_password
from sportsarena.core.database import async_session_factory, engine
from sportsarena.models import Base, Court, Event, Sport, User, UserRole
from sportsarena.services.booking_rules import local_now

USERS = [
    {"name": "Test User", "email": "test@university.edu", "password": "password123", "role": UserRole.STUDENT},
    {"name": "Arena Staff", "email": "staff@sportsarena.com", "password": "staff123", "role": UserRole.STAFF},
    {"name": "Arena Admin", "email": "admin@sportsarena.com", "password": "admin123", "role": UserRole.ADMIN},
]

# (sport, display name, number of courts, capacity per court)
COURTS = [
    (Sport.BADMINTON, "Badminton Court", 2, 4),
    (Sport.TABLE_TENNIS, "Table Tennis Court", 3, 4),
    (Sport.SQUASH, "Squash Court", 2, 2),
]

EVENTS = [
    {
        "title": "Inter-Department Badminton Tournament",
        "description": "Annual badminton championship. Register your team now!",
        "sport": Sport.BADMINTON,
        "days_ahead": 7,
        "start_time": time(9, 0),
        "end_time": time(17, 0),
        "location": "Sports Complex - Main Hall",
        "max_participants": 32,
    },
    {
        "title": "Table Tennis Championship",
        "description": "Open for all students. Singles and doubles categories available.",
        "sport": Sport.TABLE_TENNIS,
        "days_ahead": 1,
        "start_time": time(14, 0),
        "end_time": time(18, 0),
        "location": "Indoor Sports Arena",
        "max_participants": 24,
    },
]


async def seed_users(db: AsyncSession) -> None:
    for entry in USERS:
        result = await db.execute(select(User).where(User.email == entry["email"]))
        if result.scalar_one_or_none():
            continue
        db.add(
            User(
                name=entry["name"],
                email=entry["email"],
                hashed_password=hash_password(entry["password"]),
                role=entry["role"],
            )
        )
        print(f"  Created user: {entry['email']} ({entry['role'].value})")
    await db.flush()


async def seed_courts(db: AsyncSession) -> None:
    for sport, label, count, capacity in COURTS:
        for number in range(1, count + 1):
            result = await db.execute(select(Court).where(Court.sport == sport, Court.court_number == number))
            if result.scalar_one_or_none():
                continue
            db.add(Court(name=f"{label} {number}", sport=sport, court_number=number, max_capacity=capacity))
            print(f"  Created court: {label} {number} (capacity {capacity})")
    await db.flush()


async def seed_events(db: AsyncSession) -> None:
    today = local_now().date()
    for entry in EVENTS:
        result = await db.execute(select(Event).where(Event.title == entry["title"]))
        if result.scalar_one_or_none():
            continue
        fields = {k: v for k, v in entry.items() if k != "days_ahead"}
        db.add(Event(event_date=today + timedelta(days=entry["days_ahead"]), **fields))
        print(f"  Created event: {entry['title']}")
    await db.flush()


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        print("Seeding database...")
        await seed_users(db)
        await seed_courts(db)
        await seed_events(db)
        await db.commit()
        print("Database seeded successfully!")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
