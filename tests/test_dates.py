from datetime import date, datetime, timezone

import pytest

from facility_reports.domain import dates
from facility_reports.domain.errors import UnparsableDate
from tests.factories import SEOUL


@pytest.mark.parametrize("raw", [
    "2025-03-05",
    "2025.3.5",
    "2025. 3. 5.",
    "2025/03/05",
    "2025년 3월 5일",
    "  2025.03.05  ",
])
def test_normalize_accepts_loose_forms(raw):
    assert dates.normalize(raw) == "2025-03-05"


def test_normalize_iso_timestamp_uses_campus_day():
    # 16:00 UTC on the 4th is 01:00 on the 5th in Seoul
    assert dates.normalize("2025-03-04T16:00:00+00:00") == "2025-03-05"
    assert dates.normalize("2025-03-05T09:30:00") == "2025-03-05"


def test_normalize_date_objects():
    assert dates.normalize(date(2025, 3, 5)) == "2025-03-05"
    assert dates.normalize(datetime(2025, 3, 4, 20, 0, tzinfo=timezone.utc)) == "2025-03-05"
    assert dates.normalize(datetime(2025, 3, 5, 23, 0, tzinfo=SEOUL)) == "2025-03-05"


@pytest.mark.parametrize("raw", [
    None,
    "",
    "   ",
    "not-a-date",
    "25.3.5",
    "2025.3",
    "2025.13.40",
    "2025-13-45",
    "2025-02-30",
    12345,
])
def test_normalize_rejects_unusable_input(raw):
    assert dates.normalize(raw) is None


def test_normalize_strict_raises():
    with pytest.raises(UnparsableDate) as exc_info:
        dates.normalize_strict("someday")
    assert exc_info.value.raw == "someday"


def test_to_display():
    assert dates.to_display("2025-03-05") == "2025년 3월 5일"
    assert dates.to_display(datetime(2025, 12, 24, 18, 0, tzinfo=SEOUL)) == "2025년 12월 24일"
    assert dates.to_display(None) == ""


def test_to_display_falls_back_to_raw_value():
    assert dates.to_display("sometime soon") == "sometime soon"


def test_to_input_form():
    assert dates.to_input_form("2025.3.5") == "2025-03-05"
    assert dates.to_input_form("nope") == ""
    assert dates.to_input_form(None) == ""


def test_local_midnight():
    midnight = dates.local_midnight("2025-03-20")
    assert midnight == datetime(2025, 3, 20, 0, 0, tzinfo=SEOUL)


def test_to_input_form_drops_impossible_canonical_dates():
    assert dates.to_input_form("2025-02-30") == ""
