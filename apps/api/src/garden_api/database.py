"""Database connection and session management."""

import re
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm.exc import StaleDataError

from garden_api.errors import ConcurrencyConflict


def transform_database_url_for_asyncpg(url: str) -> str:
    """Transform database URL for asyncpg compatibility.

    asyncpg doesn't support 'sslmode' parameter - it uses 'ssl' instead.
    This transforms Neon-style URLs (sslmode=require) to asyncpg-compatible URLs.
    """
    return re.sub(r"sslmode=(\w+)", r"ssl=\1", url)


# Database-agnostic JSON type: JSONB on Postgres, JSON on SQLite/others
# This allows tests to use SQLite while production uses Postgres JSONB
JSONVariant = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


# Lazy-loaded engine and session factory (avoids import-time errors for Alembic)
_engine = None
_async_session = None


def get_engine():
    """Get or create the async engine."""
    global _engine
    if _engine is None:
        from garden_api.config import settings

        db_url = transform_database_url_for_asyncpg(settings.database_url)
        _engine = create_async_engine(db_url, echo=False)
    return _engine


def get_session_factory():
    """Get or create the async session factory."""
    global _async_session
    if _async_session is None:
        _async_session = async_sessionmaker(
            get_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _async_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block as one atomic unit: commit on success, roll back on any error.

    A versioned row updated concurrently by another transaction surfaces as a
    retryable ConcurrencyConflict.
    """
    try:
        yield db
        await db.commit()
    except StaleDataError as exc:
        await db.rollback()
        raise ConcurrencyConflict("State changed concurrently, please retry") from exc
    except BaseException:
        await db.rollback()
        raise
