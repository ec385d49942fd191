"""Advocate Providers — database-backed and fixture-backed record sources.

Invariants:
    - Both providers apply the matcher's semantics: same fields, lowered substring,
      blank query returns everything
    - Both return records ordered by id
    - The database predicate is built from SEARCH_FIELDS, the list the matcher uses
    - % and _ in a query are literal characters on both paths (autoescape)

Design Decisions:
    - One SELECT with OR'd icontains predicates and an EXISTS over specialty rows;
      icontains renders ILIKE on PostgreSQL and lower() LIKE lower() on SQLite,
      where the database layer swaps in a Unicode-aware lower()
    - Fixture provider holds an immutable tuple; it never sees writes
"""

import logging
from collections.abc import Iterable

from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from advocate_directory.core.domain_types import AdvocateRecord, RecordSource
from advocate_directory.core.matcher import (
    SEARCH_FIELDS, filter_advocates, normalize_query,
)
from advocate_directory.models.advocate import Advocate, AdvocateSpecialty

logger = logging.getLogger(__name__)


def advocate_search_clause(needle: str) -> ColumnElement[bool]:
    """SQL twin of matcher.matches for a non-blank, stripped query."""
    clauses = [
        getattr(Advocate, name).icontains(needle, autoescape=True)
        for name in SEARCH_FIELDS
    ]
    clauses.append(
        Advocate.specialty_rows.any(
            AdvocateSpecialty.name.icontains(needle, autoescape=True),
        ),
    )
    clauses.append(
        cast(Advocate.years_of_experience, String).icontains(
            needle, autoescape=True,
        ),
    )
    return or_(*clauses)


class DatabaseAdvocateProvider:
    """Reads advocates from the relational store."""
    source = RecordSource.DATABASE

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_advocates(
        self, search: str | None = None,
    ) -> list[AdvocateRecord]:
        query = select(Advocate).order_by(Advocate.id)
        needle = normalize_query(search)
        if needle:
            query = query.where(advocate_search_clause(needle))
        result = await self._db.execute(query)
        return [a.to_record() for a in result.scalars().all()]


class FixtureAdvocateProvider:
    """Filters a fixed in-memory record set."""
    source = RecordSource.FIXTURES

    def __init__(self, records: Iterable[AdvocateRecord]):
        self._records = tuple(sorted(records, key=lambda r: r.id))

    async def list_advocates(
        self, search: str | None = None,
    ) -> list[AdvocateRecord]:
        return filter_advocates(self._records, search)
