import json
from datetime import datetime, timedelta

import pytest

from facility_reports.domain.errors import DuplicateReport, NotFound, ValidationError
from facility_reports.domain.models import ReportStatus, Urgency
from facility_reports.domain.report_store import ReportStore
from facility_reports.infrastructure.storage import MemoryKeyValueStorage
from tests.factories import SEOUL, STORAGE_KEY, make_form


def test_submit_creates_submitted_report(store, form, now):
    report = store.submit(form, "20201234", now)

    assert report.status == ReportStatus.SUBMITTED
    assert report.reporter_id == "20201234"
    assert report.created_at == now
    assert report.deadline_at == now + timedelta(days=7)
    assert report.completed_at is None
    assert [r.id for r in store.all()] == [report.id]


def test_submit_trims_description(store, now):
    report = store.submit(make_form(description="  Leaking pipe  "), "20201234", now)
    assert report.description == "Leaking pipe"


def test_submit_persists(store, storage, form, now):
    report = store.submit(form, "20201234", now)

    stored = json.loads(storage.get(STORAGE_KEY))
    assert [r["id"] for r in stored] == [report.id]


@pytest.mark.parametrize("description", ["", "   "])
def test_blank_description_is_rejected(store, storage, now, description):
    with pytest.raises(ValidationError) as exc_info:
        store.submit(make_form(description=description), "20201234", now)

    assert exc_info.value.fields == ["description"]
    assert len(store) == 0
    assert storage.get(STORAGE_KEY) is None


def test_missing_location_fields_are_reported(store, now):
    with pytest.raises(ValidationError) as exc_info:
        store.submit(make_form(building="", room=" "), "20201234", now)
    assert exc_info.value.fields == ["building", "room"]


def test_duplicate_within_hour_is_rejected(store, form, now):
    first = store.submit(form, "20201234", now)

    with pytest.raises(DuplicateReport) as exc_info:
        store.submit(make_form(description="Still broken"), "20209999", now + timedelta(minutes=20))

    assert exc_info.value.existing_id == first.id
    assert len(store) == 1


def test_resubmission_after_an_hour_is_accepted(store, form, now):
    first = store.submit(form, "20201234", now)
    second = store.submit(form, "20201234", now + timedelta(hours=2))

    # Most recent first
    assert [r.id for r in store.all()] == [second.id, first.id]


def test_resubmission_next_day_is_accepted(store):
    late = datetime(2025, 3, 5, 23, 40, tzinfo=SEOUL)
    store.submit(make_form(), "20201234", late)
    store.submit(make_form(), "20201234", late + timedelta(minutes=30))
    assert len(store) == 2


def test_ids_are_unique_and_increasing(store, now):
    first = store.submit(make_form(room="101"), "20201234", now)
    second = store.submit(make_form(room="102"), "20201234", now)
    assert second.id > first.id


def test_update_status_to_completed_stamps_completed_at(store, form, now):
    report = store.submit(form, "20201234", now)
    done_at = now + timedelta(days=1)

    updated = store.update_status(report.id, ReportStatus.COMPLETED, done_at)
    assert updated.status == ReportStatus.COMPLETED
    assert updated.completed_at == done_at

    reopened = store.update_status(report.id, "processing", done_at + timedelta(hours=3))
    assert reopened.status == ReportStatus.PROCESSING
    assert reopened.completed_at == done_at


def test_update_status_unknown_id(store, now):
    with pytest.raises(NotFound):
        store.update_status(42, ReportStatus.PROCESSING, now)


def test_update_deadline_clears_on_empty(store, form, now):
    report = store.submit(form, "20201234", now)
    assert store.update_deadline(report.id, "").deadline_at is None


def test_update_deadline_ignores_unparsable(store, form, now):
    report = store.submit(form, "20201234", now)

    unchanged = store.update_deadline(report.id, "not-a-date")
    assert unchanged.deadline_at == report.deadline_at
    assert store.get(report.id).deadline_at == report.deadline_at


def test_update_deadline_sets_local_midnight(store, form, now):
    report = store.submit(form, "20201234", now)
    updated = store.update_deadline(report.id, "2025.3.20")
    assert updated.deadline_at == datetime(2025, 3, 20, tzinfo=SEOUL)


def test_update_deadline_unknown_id(store):
    with pytest.raises(NotFound):
        store.update_deadline(7, "2025-03-20")


def test_snapshots_are_not_affected_by_later_updates(store, form, now):
    report = store.submit(form, "20201234", now)
    snapshot = store.all()

    store.update_status(report.id, ReportStatus.PROCESSING, now)

    assert snapshot[0].status == ReportStatus.SUBMITTED
    assert store.get(report.id).status == ReportStatus.PROCESSING


def test_selection_follows_updates(store, form, now):
    report = store.submit(form, "20201234", now)
    store.select(report.id)

    store.update_status(report.id, ReportStatus.COMPLETED, now)
    assert store.selected.status == ReportStatus.COMPLETED
    assert store.selected.completed_at == now

    store.update_deadline(report.id, "")
    assert store.selected.deadline_at is None


def test_selection_of_other_report_is_untouched(store, now):
    first = store.submit(make_form(room="101"), "20201234", now)
    second = store.submit(make_form(room="102"), "20201234", now)
    store.select(first.id)

    store.update_status(second.id, ReportStatus.PROCESSING, now)
    assert store.selected.id == first.id
    assert store.selected.status == ReportStatus.SUBMITTED


def test_select_unknown_id(store):
    with pytest.raises(NotFound):
        store.select(1)
    assert store.selected is None


def test_round_trip_through_storage(store, storage, now):
    store.submit(make_form(room="101", urgency=Urgency.URGENT), "20201234", now)
    second = store.submit(make_form(room="102", image="data:image/png;base64,AAAA"), "20205678", now)
    store.update_status(second.id, ReportStatus.COMPLETED, now + timedelta(hours=5))

    reloaded = ReportStore(storage, key=STORAGE_KEY)
    reloaded.load()

    assert [r.model_dump() for r in reloaded.all()] == [r.model_dump() for r in store.all()]


def test_load_keeps_ids_increasing(store, storage, now):
    first = store.submit(make_form(room="101"), "20201234", now)

    reloaded = ReportStore(storage, key=STORAGE_KEY)
    reloaded.load()
    later = reloaded.submit(make_form(room="102"), "20201234", now - timedelta(days=1))
    assert later.id > first.id


def test_persist_removes_key_when_empty():
    storage = MemoryKeyValueStorage({STORAGE_KEY: "[]"})
    store = ReportStore(storage, key=STORAGE_KEY)
    store.load()

    store.persist()
    assert storage.get(STORAGE_KEY) is None


@pytest.mark.parametrize("raw", [
    "{not json",
    '{"id": 1}',
    "[1, 2, 3]",
    '[{"id": "x"}]',
])
def test_corrupt_storage_loads_as_empty(raw):
    store = ReportStore(MemoryKeyValueStorage({STORAGE_KEY: raw}), key=STORAGE_KEY)
    store.load()
    assert store.all() == ()


def test_unparsable_deadline_is_repaired_from_urgency():
    record = {
        "id": 1741136400000,
        "reporter_id": "20201234",
        "building": "도서관",
        "floor": "1층",
        "room": "열람실",
        "description": "Flickering lights",
        "urgency": "high",
        "status": "submitted",
        "created_at": "2025-03-05T10:00:00+09:00",
        "deadline_at": "next tuesday",
    }
    store = ReportStore(MemoryKeyValueStorage({STORAGE_KEY: json.dumps([record])}), key=STORAGE_KEY)
    store.load()

    [report] = store.all()
    assert report.deadline_at == datetime(2025, 3, 6, 10, 0, tzinfo=SEOUL)


def test_clear_selection(store, form, now):
    report = store.submit(form, "20201234", now)
    store.select(report.id)

    store.clear_selection()
    store.update_status(report.id, ReportStatus.PROCESSING, now)
    assert store.selected is None


@pytest.mark.parametrize("raw", ["2025-13-45", "2025-02-30"])
def test_update_deadline_ignores_impossible_dates(store, form, now, raw):
    report = store.submit(form, "20201234", now)

    unchanged = store.update_deadline(report.id, raw)
    assert unchanged.deadline_at == report.deadline_at
    assert store.get(report.id).deadline_at == report.deadline_at


def test_naive_now_is_read_as_utc(store, form):
    first = store.submit(form, "20201234", datetime(2025, 3, 5, 1, 0))
    assert first.created_at == datetime(2025, 3, 5, 10, 0, tzinfo=SEOUL)

    with pytest.raises(DuplicateReport) as exc_info:
        store.submit(form, "20201234", datetime(2025, 3, 5, 1, 5))
    assert exc_info.value.existing_id == first.id

    done = store.update_status(first.id, ReportStatus.COMPLETED, datetime(2025, 3, 5, 2, 0))
    assert done.completed_at == datetime(2025, 3, 5, 11, 0, tzinfo=SEOUL)


def test_selections_are_kept_per_view(store, now):
    first = store.submit(make_form(room="101"), "20201234", now)
    second = store.submit(make_form(room="102"), "20201234", now)
    store.select(first.id, owner="a")
    store.select(second.id, owner="b")

    store.update_status(first.id, ReportStatus.PROCESSING, now)
    store.update_status(second.id, ReportStatus.COMPLETED, now)

    assert store.selected_for("a").status == ReportStatus.PROCESSING
    assert store.selected_for("b").status == ReportStatus.COMPLETED
    assert store.selected is None

    store.clear_selection("a")
    assert store.selected_for("a") is None
    assert store.selected_for("b").id == second.id
