"""Domain Types — verifies records, phone formatting, and enum values.

Tests:
    - AdvocateRecord is frozen and exposes full_name
    - Phone numbers render as (555) 123-4567
    - Enums serialize to their string values
"""

import dataclasses

import pytest

from advocate_directory.core.domain_types import (
    AdvocateId, FetchKind, RecordSource, SearchPhase, format_phone_number,
)
from tests.records import make_record


def test_advocate_id_wraps_int():
    assert AdvocateId(1) == 1


def test_record_is_immutable(jane_doe):
    with pytest.raises(dataclasses.FrozenInstanceError):
        jane_doe.city = "Elko"


def test_full_name_joins_with_single_space(jane_doe):
    assert jane_doe.full_name == "Jane Doe"


def test_created_at_is_optional():
    assert make_record().created_at is None


def test_phone_number_formats_ten_digits():
    assert format_phone_number(5551234567) == "(555) 123-4567"


def test_phone_number_other_widths_pass_through():
    assert format_phone_number(12345) == "12345"


def test_search_phase_has_four_states():
    assert {p.value for p in SearchPhase} == {
        "idle", "debouncing", "fetching", "errored",
    }


def test_enums_serialize_to_string_values():
    assert FetchKind.LOAD.value == "load"
    assert FetchKind.SEARCH.value == "search"
    assert RecordSource.DATABASE.value == "database"
    assert RecordSource.FIXTURES.value == "fixtures"
