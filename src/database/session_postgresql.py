from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker
)

from config.settings import get_settings
from database.models.base import Base

settings = get_settings()

POSTGRESQL_DATABASE_URL = URL.create(
    "postgresql+asyncpg",
    username=settings.POSTGRES_USER,
    password=settings.POSTGRES_PASSWORD,
    host=settings.POSTGRES_HOST,
    port=settings.POSTGRES_DB_PORT,
    database=settings.POSTGRES_DB
)
postgresql_engine = create_async_engine(
    POSTGRESQL_DATABASE_URL,
    echo=False,
    pool_pre_ping=True
)
AsyncPostgresqlSessionLocal = async_sessionmaker(
    bind=postgresql_engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False
)


async def get_postgresql_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one PostgreSQL session per request.

    Connections are checked with a ping before use so a restarted database
    does not fail the first request after it comes back.
    """
    async with AsyncPostgresqlSessionLocal() as session:
        yield session


get_postgresql_db_contextmanager = asynccontextmanager(get_postgresql_db)


async def create_postgresql_tables() -> None:
    async with postgresql_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
