"""Request Dependencies — selects the record provider and store session per request.

Invariants:
    - The store handle is read from app.state.db_manager, set by the lifespan;
      no module-level database global exists
    - No store configured → FixtureAdvocateProvider with identical filtering
    - get_db refuses with StoreUnavailableError when no store is configured

Design Decisions:
    - Yield dependencies so the session closes after the response is built
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from advocate_directory.core.errors import StoreUnavailableError
from advocate_directory.core.repository_protocols import AdvocateProvider
from advocate_directory.db.fixtures import fixture_records
from advocate_directory.infrastructure.database import DatabaseSessionManager
from advocate_directory.services.advocate_provider import (
    DatabaseAdvocateProvider, FixtureAdvocateProvider,
)


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db_manager", None)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for store sessions on write endpoints."""
    db_manager = get_db_manager(request)
    if db_manager is None:
        raise StoreUnavailableError()
    async with db_manager.session() as session:
        yield session


async def get_advocate_provider(
    request: Request,
) -> AsyncGenerator[AdvocateProvider, None]:
    """Database provider when a store is configured, fixture provider otherwise."""
    db_manager = get_db_manager(request)
    if db_manager is None:
        yield FixtureAdvocateProvider(fixture_records())
        return
    async with db_manager.session() as session:
        yield DatabaseAdvocateProvider(session)
