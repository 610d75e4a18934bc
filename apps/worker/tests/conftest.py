"""Pytest configuration and fixtures for worker tests."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """In-memory SQLite holding just the plot columns the scheduler touches."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.execute(
            text("""
                CREATE TABLE plots (
                    id VARCHAR(36) PRIMARY KEY,
                    stage VARCHAR(20) NOT NULL DEFAULT 'empty',
                    planted_at BIGINT,
                    mature_at BIGINT
                )
            """)
        )

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def insert_plot(session_factory):
    """Insert a plot row: insert_plot(id, stage, planted_at, mature_at)."""

    async def _insert(plot_id: str, stage: str, planted_at: int | None, mature_at: int | None):
        async with session_factory() as session:
            async with session.begin():
                await session.execute(
                    text("""
                        INSERT INTO plots (id, stage, planted_at, mature_at)
                        VALUES (:id, :stage, :planted_at, :mature_at)
                    """),
                    {"id": plot_id, "stage": stage, "planted_at": planted_at, "mature_at": mature_at},
                )

    return _insert


@pytest_asyncio.fixture
async def plot_stage(session_factory):
    async def _stage(plot_id: str) -> str:
        async with session_factory() as session:
            result = await session.execute(
                text("SELECT stage FROM plots WHERE id = :id"), {"id": plot_id}
            )
            return result.scalar_one()

    return _stage
