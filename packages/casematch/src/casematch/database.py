"""Async case store: engine, session factory and the request dependency."""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from typing import AsyncGenerator

from .config import settings
from .models import Base

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
)

# Services commit their own writes and keep using the loaded rows afterwards.
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; uncommitted work is rolled back on close."""
    async with async_session() as session:
        yield session


async def init_db():
    """Create the case, attorney and interest tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = ["engine", "async_session", "get_db", "init_db", "Base"]
