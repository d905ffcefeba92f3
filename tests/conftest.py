from datetime import datetime

import pytest

from facility_reports.domain.report_store import ReportStore
from facility_reports.infrastructure.storage import MemoryKeyValueStorage
from tests.factories import SEOUL, STORAGE_KEY, make_form


@pytest.fixture
def now():
    return datetime(2025, 3, 5, 10, 0, tzinfo=SEOUL)


@pytest.fixture
def storage():
    return MemoryKeyValueStorage()


@pytest.fixture
def store(storage):
    s = ReportStore(storage, key=STORAGE_KEY)
    s.load()
    return s


@pytest.fixture
def form():
    return make_form()
