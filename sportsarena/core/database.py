"""Async database engine and session management.

One session per request: committed when the handler returns, rolled back
when anything raises, so a failed validation never leaves partial writes.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sportsarena.core.config import settings


def _engine_options(url: str) -> dict:
    # SQLite (used by the test suite) does not take pool sizing arguments
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 20, "max_overflow": 10, "pool_pre_ping": True}


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_options(settings.database_url),
)

if settings.database_url.startswith("sqlite"):
    # SQLite has no SELECT ... FOR UPDATE. Take the database write lock when
    # each transaction begins instead, so admissions still run one at a time.

    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_manual_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _sqlite_begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session. Used as a FastAPI dependency."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
