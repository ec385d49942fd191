"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record access goes through AdvocateProvider; the query endpoint never knows
      whether a database or the fixture set answered
    - Both providers return records ordered by id

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the pure matcher they share does not
"""

from typing import Protocol

from advocate_directory.core.domain_types import AdvocateRecord, RecordSource


class AdvocateProvider(Protocol):
    """Source of advocate records for the query endpoint — implemented by shell."""
    source: RecordSource

    async def list_advocates(
        self, search: str | None = None,
    ) -> list[AdvocateRecord]: ...


class AdvocateFetcher(Protocol):
    """Consumer-side access to the query endpoint — implemented by the HTTP client."""
    async def fetch_advocates(
        self, search: str | None = None,
    ) -> list[AdvocateRecord]: ...
