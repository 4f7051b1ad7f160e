"""
Database engine, session factory and declarative base
"""
import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from civic_reports.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all models"""
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a database session"""
    async with async_session_factory() as session:
        yield session


async def init_db() -> None:
    """Create tables that do not exist yet"""
    # Import models so they are registered on the metadata
    from civic_reports import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose the engine connection pool"""
    await engine.dispose()
    logger.info("Database connections closed")
