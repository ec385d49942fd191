"""Advocate Client — httpx wrapper for the query endpoint with error mapping.

Invariants:
    - Exactly one GET per fetch_advocates call; no automatic retries
    - `search` is sent only when non-blank; blank means "fetch all"
    - Transport failures, non-2xx statuses, and malformed envelopes all surface as
      AdvocateFetchError (core/errors.py); httpx exceptions never leak
    - Only the `data` envelope is accepted

Design Decisions:
    - Injectable transport: tests pass httpx.MockTransport or ASGITransport
    - Server-provided `error` text preferred in the exception message when present
"""

import logging

import httpx

from advocate_directory.core.domain_types import AdvocateRecord
from advocate_directory.core.errors import AdvocateFetchError
from advocate_directory.core.matcher import normalize_query
from advocate_directory.schemas.advocate import AdvocateListResponse

logger = logging.getLogger(__name__)

ADVOCATES_PATH = "/api/advocates"


def _error_message(response: httpx.Response) -> str:
    """Pull the server's error string, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"Advocate directory returned HTTP {response.status_code}"


class AdvocateClient:
    """Fetches advocates from the query endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )

    async def fetch_advocates(
        self, search: str | None = None,
    ) -> list[AdvocateRecord]:
        needle = normalize_query(search)
        params = {"search": needle} if needle else None
        try:
            response = await self.client.get(ADVOCATES_PATH, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Advocate request failed: {e}", extra={"search": needle})
            raise AdvocateFetchError(
                "Could not reach the advocate directory",
            ) from e

        if not response.is_success:
            raise AdvocateFetchError(
                _error_message(response), status_code=response.status_code,
            )

        try:
            envelope = AdvocateListResponse.model_validate(response.json())
        except ValueError as e:
            raise AdvocateFetchError(
                "Malformed advocate response", status_code=response.status_code,
            ) from e
        return [advocate.to_record() for advocate in envelope.data]

    async def aclose(self) -> None:
        await self.client.aclose()
