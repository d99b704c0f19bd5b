from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker
)
from sqlalchemy.pool import NullPool

from config.settings import get_settings
from database.models.base import Base

settings = get_settings()

Path(settings.PATH_TO_DB).parent.mkdir(parents=True, exist_ok=True)

SQLITE_DATABASE_URL = f"sqlite+aiosqlite:///{settings.PATH_TO_DB}"
sqlite_engine = create_async_engine(
    SQLITE_DATABASE_URL,
    echo=False,
    poolclass=NullPool
)


@event.listens_for(sqlite_engine.sync_engine, "connect")
def enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores foreign keys unless enabled on every connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


AsyncSQLiteSessionLocal = async_sessionmaker(
    sqlite_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_sqlite_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one SQLite session per request.

    The same generator backs ``get_sqlite_db_contextmanager``, which test
    fixtures use outside of request handling.
    """
    async with AsyncSQLiteSessionLocal() as session:
        yield session


get_sqlite_db_contextmanager = asynccontextmanager(get_sqlite_db)


async def reset_sqlite_database() -> None:
    """Drop and recreate every table, leaving an empty schema."""
    async with sqlite_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def create_sqlite_tables() -> None:
    async with sqlite_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
