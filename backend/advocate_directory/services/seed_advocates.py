"""Seed Advocates — inserts the fixture set into the configured store.

Invariants:
    - All fixtures inserted in one transaction, in list order
    - Returns the inserted records with their store-assigned ids
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from advocate_directory.core.domain_types import AdvocateRecord
from advocate_directory.db.fixtures import ADVOCATE_FIXTURES
from advocate_directory.models.advocate import Advocate

logger = logging.getLogger(__name__)


async def seed_advocates(
    db: AsyncSession, fixtures: list[dict] | None = None,
) -> list[AdvocateRecord]:
    rows = [
        Advocate.from_fixture(data)
        for data in (ADVOCATE_FIXTURES if fixtures is None else fixtures)
    ]
    db.add_all(rows)
    await db.commit()
    logger.info(f"Seeded {len(rows)} advocates", extra={"result_count": len(rows)})
    return [row.to_record() for row in rows]
