"""Advocate Matcher — decides whether a record matches a free-text query.

Invariants:
    - Pure function: no IO, no async, no DB
    - Blank query (after strip) matches every record
    - Case-insensitive substring containment, never token or fuzzy matching
      ("hera" matches the specialty "Therapy")
    - Searched: first name, last name, "first last", city, degree, each single
      specialty, years of experience as a decimal string
    - phone_number is never searched

Design Decisions:
    - str.lower() rather than casefold(): must agree with SQL lower()/ILIKE used by
      the database provider, which only lowers, never folds
    - SEARCH_FIELDS is the single list both providers build their predicate from
"""

from collections.abc import Iterable

from advocate_directory.core.domain_types import AdvocateRecord

# Scalar text fields searched directly; specialties and years are handled apart
SEARCH_FIELDS = ("first_name", "last_name", "full_name", "city", "degree")


def normalize_query(query: str | None) -> str:
    """Strip surrounding whitespace; None counts as blank."""
    return (query or "").strip()


def searchable_values(record: AdvocateRecord) -> list[str]:
    """Every string a query is matched against, in field order."""
    values = [getattr(record, name) for name in SEARCH_FIELDS]
    values.extend(record.specialties)
    values.append(str(record.years_of_experience))
    return values


def matches(record: AdvocateRecord, query: str | None) -> bool:
    """True if the query is blank or a substring of any searched field."""
    needle = normalize_query(query).lower()
    if not needle:
        return True
    return any(needle in value.lower() for value in searchable_values(record))


def filter_advocates(
    records: Iterable[AdvocateRecord], query: str | None,
) -> list[AdvocateRecord]:
    """Keep matching records, preserving input order."""
    return [r for r in records if matches(r, query)]
