"""Advocates Route — the query endpoint.

Invariants:
    - GET /api/advocates always answers {"data": [...]} on success, ordered by id
    - Blank or absent `search` returns the full set
    - Store failures become a 500 with {"error": "Failed to fetch advocates"}
    - Which provider answered is logged, never exposed to the caller
    - No length limit on `search`: a long query is filtered like any other
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError

from advocate_directory.api.dependencies import get_advocate_provider
from advocate_directory.core.errors import (
    AdvocateQueryError, DatabaseError, ErrorContext,
)
from advocate_directory.core.repository_protocols import AdvocateProvider
from advocate_directory.schemas.advocate import AdvocateListResponse, AdvocateOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/advocates", tags=["advocates"])


@router.get("", response_model=AdvocateListResponse)
async def list_advocates(
    search: str | None = Query(None),
    provider: AdvocateProvider = Depends(get_advocate_provider),
):
    """List advocates, filtered by substring when `search` is non-blank."""
    source = provider.source.value
    logger.info(
        f'Using {source} search for: "{search or "all records"}"',
        extra={"search": search, "source": source},
    )
    try:
        records = await provider.list_advocates(search)
    except (SQLAlchemyError, DatabaseError) as e:
        logger.error(f"Error in advocates API: {e}", exc_info=True)
        raise AdvocateQueryError(ErrorContext(search=search)) from e

    logger.info(
        f"{source} returned {len(records)} advocates",
        extra={"source": source, "result_count": len(records)},
    )
    return AdvocateListResponse(
        data=[AdvocateOut.from_record(r) for r in records],
    )
