"""Pytest configuration and fixtures for API tests."""

import os
from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio
from garden_api.database import Base, get_db
from garden_api.game.class_weights import ClassWeightTable, set_class_weights
from garden_api.main import app
from garden_api.models import Floor, InventoryPot, InventorySeed, Player, Plot
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Use SQLite for local tests, PostgreSQL in CI (when TEST_DATABASE_URL is set)
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

is_sqlite = TEST_DATABASE_URL.startswith("sqlite")


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """A fresh schema per test, created and dropped on the test's own event loop."""
    if is_sqlite:
        # SQLite in-memory requires StaticPool to keep connection alive
        engine = create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        # PostgreSQL settings - use NullPool to avoid event loop issues
        engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(autouse=True)
def basic_class_weights(tmp_path):
    """Pin the class table to the four basic classes at equal weight."""
    set_class_weights(ClassWeightTable(tmp_path / "missing_class_weights.json"))
    yield
    set_class_weights(None)


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for FastAPI app."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def login(client):
    """Log a username in through the API and return the player id."""

    async def _login(username: str) -> UUID:
        response = await client.post("/auth/login", json={"username": username})
        assert response.status_code == 200, response.text
        return UUID(response.json()["player"]["id"])

    return _login


@pytest_asyncio.fixture
async def alice(login) -> UUID:
    return await login("alice")


@pytest_asyncio.fixture
async def bob(login) -> UUID:
    return await login("bob")


@pytest_asyncio.fixture
async def give_seed(session_factory):
    """Insert an inventory seed directly and return its id."""

    async def _give(
        player_id: UUID,
        seed_class: str = "fire",
        base_price: int = 100,
        is_mature: bool = True,
        mutation: str | None = None,
    ) -> UUID:
        async with session_factory() as session:
            seed = InventorySeed(
                player_id=player_id,
                seed_class=seed_class,
                base_price=base_price,
                is_mature=is_mature,
                mutation=mutation,
            )
            session.add(seed)
            await session.commit()
            return seed.id

    return _give


@pytest_asyncio.fixture
async def give_pot(session_factory):
    """Insert an inventory pot directly and return its id."""

    async def _give(player_id: UUID, pot_type: str = "basic", speed_mult: float = 1.0) -> UUID:
        async with session_factory() as session:
            pot = InventoryPot(
                player_id=player_id, pot_type=pot_type, speed_mult=speed_mult, yield_mult=1.0
            )
            session.add(pot)
            await session.commit()
            return pot.id

    return _give


@pytest_asyncio.fixture
async def first_floor(session_factory):
    """Return (floor_id, {slot: plot_id}) for a player's floor 1."""

    async def _first_floor(player_id: UUID) -> tuple[UUID, dict[int, UUID]]:
        async with session_factory() as session:
            floor_id = await session.scalar(
                select(Floor.id).where(Floor.player_id == player_id, Floor.idx == 1)
            )
            result = await session.execute(
                select(Plot.slot, Plot.id).where(Plot.floor_id == floor_id)
            )
            return floor_id, {slot: plot_id for slot, plot_id in result}

    return _first_floor


@pytest_asyncio.fixture
async def set_plot(session_factory):
    """Force plot columns (e.g. a mature occupant) without going through the API."""

    async def _set(plot_id: UUID, **values) -> None:
        async with session_factory() as session:
            await session.execute(update(Plot).where(Plot.id == plot_id).values(**values))
            await session.commit()

    return _set


@pytest_asyncio.fixture
async def set_coins(session_factory):
    async def _set(player_id: UUID, coins: int) -> None:
        async with session_factory() as session:
            await session.execute(update(Player).where(Player.id == player_id).values(coins=coins))
            await session.commit()

    return _set
