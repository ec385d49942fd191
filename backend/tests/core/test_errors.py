"""Error Hierarchy — verifies codes, statuses, and the REST envelope.

Tests:
    - to_response carries `error` as a plain string
    - Each concrete error maps to its HTTP status
    - AdvocateFetchError keeps the upstream status code (None for transport)
"""

from dataclasses import fields

from advocate_directory.core.errors import (
    AdvocateFetchError, AdvocateQueryError, DatabaseError, ErrorCategory, ErrorContext,
    SeedError, StoreUnavailableError,
)


def test_response_envelope_has_string_error():
    body = AdvocateQueryError().to_response()
    assert body["error"] == "Failed to fetch advocates"
    assert body["code"] == "ADVOCATE_QUERY_FAILED"
    assert body["severity"] == "critical"
    assert "timestamp" in body


def test_store_unavailable_is_400():
    err = StoreUnavailableError()
    assert err.http_status == 400
    assert "DATABASE_URL" in err.message


def test_seed_error_is_500():
    assert SeedError().http_status == 500
    assert SeedError().message == "Failed to seed database"


def test_database_error_includes_operation():
    err = DatabaseError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.operation == "execute"
    assert err.category is ErrorCategory.DATABASE


def test_fetch_error_keeps_status_code():
    assert AdvocateFetchError("boom", status_code=500).status_code == 500


def test_fetch_error_without_response_has_no_status():
    err = AdvocateFetchError("unreachable")
    assert err.status_code is None
    assert err.category is ErrorCategory.EXTERNAL_API


def test_error_context_carries_search_only():
    context = ErrorContext(search="anx")
    assert {f.name for f in fields(context)} == {"timestamp", "search"}
    assert AdvocateQueryError(context).context.search == "anx"
