"""Root conftest — shared test configuration."""

import os

import pytest

from advocate_directory.core.domain_types import AdvocateRecord
from tests.records import make_record

# Tests never reach a real store or a real API server
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("API_BASE_URL", "http://test")


@pytest.fixture
def jane_doe() -> AdvocateRecord:
    return make_record()
