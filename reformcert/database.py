"""
database.py — SQLAlchemy 2.0 async engine and session factory.

This module owns all database connection infrastructure.

Usage in routes:
    from reformcert.database import get_db
    async def my_route(db: AsyncSession = Depends(get_db)): ...
"""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from reformcert.config import settings


class Base(DeclarativeBase):
    """
    Declarative base for every ORM model in reformcert/models/.
    Lives here, not in models/, so alembic/env.py can import it without cycles.
    """
    pass


async_engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=5,
    max_overflow=10,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one AsyncSession per request.

    Commits when the route returns, rolls back if it raises. A category Save
    (delete line items, recreate them, upsert the summary) therefore lands
    atomically or not at all.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
