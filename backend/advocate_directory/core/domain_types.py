"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AdvocateId wraps int — unique within a result set, stable across fetches
    - AdvocateRecord is frozen: records are never mutated after they are fetched
    - All valid coordinator states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers for identity: zero runtime cost
    - Tuples for specialties inside the record: keeps the dataclass hashable and immutable
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AdvocateId = NewType("AdvocateId", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_DEBOUNCE_MS = 300
FETCH_FAILED_MESSAGE = "Failed to fetch advocates"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class AdvocateRecord:
    """One directory entry, as handed out by a record provider."""
    id: AdvocateId
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: tuple[str, ...]
    years_of_experience: int
    phone_number: int
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def format_phone_number(phone_number: int) -> str:
    """Render a 10-digit number as (555) 123-4567; other widths pass through."""
    digits = str(phone_number)
    if len(digits) != 10:
        return digits
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


# ─── Enums ───────────────────────────────────────────────────────

class SearchPhase(str, Enum):
    """Coordinator lifecycle states — derived from SearchState, never stored."""
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    FETCHING = "fetching"
    ERRORED = "errored"


class FetchKind(str, Enum):
    """Whole-set loads and query-triggered searches are reported separately."""
    LOAD = "load"
    SEARCH = "search"


class RecordSource(str, Enum):
    """Which provider served a query endpoint request."""
    DATABASE = "database"
    FIXTURES = "fixtures"
