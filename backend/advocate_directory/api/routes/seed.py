"""Seed Route — populates the store from the fixture set.

Invariants:
    - POST /api/seed answers 400 when no store is configured (raised by get_db)
    - Store failures become a 500 with {"error": "Failed to seed database"}
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from advocate_directory.api.dependencies import get_db
from advocate_directory.core.errors import DatabaseError, SeedError
from advocate_directory.schemas.advocate import AdvocateOut, SeedResponse
from advocate_directory.services.seed_advocates import seed_advocates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/seed", tags=["seed"])


@router.post("", response_model=SeedResponse)
async def seed(db: AsyncSession = Depends(get_db)):
    """Insert every fixture advocate and return the stored rows."""
    try:
        records = await seed_advocates(db)
    except (SQLAlchemyError, DatabaseError) as e:
        await db.rollback()
        logger.error(f"Error seeding database: {e}", exc_info=True)
        raise SeedError() from e
    return SeedResponse(advocates=[AdvocateOut.from_record(r) for r in records])
