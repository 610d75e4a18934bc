"""Database connection for the worker."""

import re

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from garden_worker.config import settings


def _transform_url_for_asyncpg(url: str) -> str:
    """Transform database URL for asyncpg compatibility.

    asyncpg doesn't support 'sslmode' parameter, it uses 'ssl' instead.
    """
    return re.sub(r"sslmode=(\w+)", r"ssl=\1", url)


_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory (the engine is built on first use)."""
    global _session_factory
    if _session_factory is None:
        engine = create_async_engine(
            _transform_url_for_asyncpg(settings.database_url), echo=False
        )
        _session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return _session_factory
