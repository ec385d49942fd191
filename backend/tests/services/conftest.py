"""Service test fixtures — async DB, FastAPI test clients, fake search plumbing.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - `client` and `fixture_client` each serve their own app instance, so both
      can be live in one test without sharing app.state.db_manager

Design Decisions:
    - SQLite in-memory: fast, no external dependency; icontains compiles to
      lower() LIKE lower() there, with the same Unicode-aware lower() that
      DatabaseSessionManager registers for SQLite URLs
    - Fake DatabaseSessionManager built with __new__: reuses the test engine
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from advocate_directory.db.base import Base
from advocate_directory.infrastructure.database import (
    DatabaseSessionManager, register_sqlite_functions,
)
from advocate_directory.main import create_app
from advocate_directory.services.seed_advocates import seed_advocates
import advocate_directory.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    register_sqlite_functions(engine)
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
async def seeded_db(test_db):
    """Test DB holding the full fixture set (ids 1..N)."""
    await seed_advocates(test_db)
    return test_db


@pytest.fixture
def test_db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


async def _serve(db_manager):
    app = create_app()
    app.state.db_manager = db_manager
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client backed by the in-memory database."""
    async for c in _serve(test_db_manager):
        yield c


@pytest.fixture
async def fixture_client():
    """FastAPI test client with no store configured (fixture fallback)."""
    async for c in _serve(None):
        yield c
