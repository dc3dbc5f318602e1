"""
Database Configuration and Session Management

Engines are created on first use and owned by the host application;
sessions are acquired per request.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""
    pass


@lru_cache
def get_async_engine() -> AsyncEngine:
    """Async engine (for application)."""
    settings = get_settings()
    return create_async_engine(
        settings.sqlalchemy_database_url.replace("postgresql://", "postgresql+asyncpg://"),
        echo=settings.database_echo,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_async_engine(),
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def dispose_engines() -> None:
    """Release pooled connections on shutdown."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
        get_async_engine.cache_clear()
        get_session_factory.cache_clear()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database session."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

