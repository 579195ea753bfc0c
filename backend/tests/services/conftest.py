"""Service test fixtures: async DB, seeded rosters and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check hits the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so a fresh session sees what another committed
    - Row locks (FOR UPDATE) are skipped on SQLite; lock behaviour is covered
      through PlayerLockRegistry instead
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import xp_economy.infrastructure.database as db_module
import xp_economy.models  # noqa: F401  (registers every table on Base.metadata)
from xp_economy.db.base import Base
from xp_economy.infrastructure.database import get_db, DatabaseSessionManager
from xp_economy.main import app
from xp_economy.models.match import Match
from tests.services.roster_factory import make_team


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_match(test_db):
    """Completed home win between two equal five-player teams at 50 XP."""
    home = await make_team(test_db, "home")
    away = await make_team(test_db, "away")
    match = Match(
        status="completed", match_type="league",
        home_team_id=home.id, away_team_id=away.id,
        home_score=16, away_score=10, result="win",
    )
    test_db.add(match)
    await test_db.commit()
    return match
