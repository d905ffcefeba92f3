"""Authoritative in-memory report collection.

The store owns the collection and one "currently selected report" slot per
view (an API session, or the default view). Reports it hands out are
copies: every mutation replaces the canonical copy and refreshes each slot
that points at the same report. Mutations write through to durable
storage by calling ``persist()``.
"""
import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import structlog
from pydantic import ValidationError as ModelValidationError

from facility_reports.config import settings
from facility_reports.domain import dates
from facility_reports.domain.clock import ensure_aware
from facility_reports.domain.deadline_policy import compute_deadline
from facility_reports.domain.duplicate_detector import find_duplicate
from facility_reports.domain.errors import (
    DuplicateReport,
    NotFound,
    StorageCorrupt,
    UnparsableDate,
    ValidationError,
)
from facility_reports.domain.models.report import Report, ReportCreate, ReportStatus
from facility_reports.infrastructure.storage import KeyValueStorage

logger = structlog.get_logger()

REQUIRED_FIELDS = ("building", "floor", "room", "description")
DEFAULT_VIEW = "default"


def _is_parsable_timestamp(value: Any) -> bool:
    if value is None or isinstance(value, datetime):
        return True
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


class ReportStore:
    def __init__(self, storage: KeyValueStorage, key: Optional[str] = None):
        self._storage = storage
        self._key = key or settings.storage_key
        self._reports: List[Report] = []
        self._selections: Dict[str, Report] = {}
        self._last_id = 0

    # --- Persistence -----------------------------------------------------

    def load(self) -> None:
        """Replace the collection with the durable copy.

        A missing key is an empty collection; an unreadable one is logged
        and also treated as empty.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            self._reports = []
        else:
            try:
                self._reports = self._decode(raw)
            except StorageCorrupt as e:
                logger.warning("storage_corrupt", key=self._key, reason=e.reason)
                self._reports = []

        self._last_id = max((r.id for r in self._reports), default=0)
        self._refresh_selection()
        logger.info("reports_loaded", key=self._key, count=len(self._reports))

    def persist(self) -> None:
        if not self._reports:
            self._storage.delete(self._key)
            logger.info("storage_cleared", key=self._key)
            return

        payload = json.dumps(
            [r.model_dump(mode="json") for r in self._reports],
            ensure_ascii=False,
        )
        self._storage.set(self._key, payload)
        logger.debug("reports_persisted", key=self._key, count=len(self._reports))

    def _decode(self, raw: str) -> List[Report]:
        try:
            records = json.loads(raw)
        except ValueError as e:
            raise StorageCorrupt(self._key, f"invalid JSON: {e}") from e
        if not isinstance(records, list):
            raise StorageCorrupt(self._key, "expected a list of reports")

        reports = []
        for record in records:
            if not isinstance(record, dict):
                raise StorageCorrupt(self._key, "expected report objects")
            reports.append(self._decode_record(record))
        return reports

    def _decode_record(self, record: Dict[str, Any]) -> Report:
        needs_repair = not _is_parsable_timestamp(record.get("deadline_at"))
        if needs_repair:
            record = {**record, "deadline_at": None}

        try:
            report = Report.model_validate(record)
        except ModelValidationError as e:
            raise StorageCorrupt(self._key, f"invalid report record: {e}") from e

        if needs_repair:
            deadline = compute_deadline(report.urgency, report.created_at)
            report = report.model_copy(update={"deadline_at": deadline.deadline_at})
            logger.warning("deadline_repaired", report_id=report.id, deadline=deadline.deadline_date)
        return report

    # --- Reads -----------------------------------------------------------

    def all(self) -> Sequence[Report]:
        """Snapshot in store order (most recent first)"""
        return tuple(r.model_copy() for r in self._reports)

    def get(self, report_id: int) -> Report:
        return self._find(report_id)[1].model_copy()

    def _find(self, report_id: int):
        for index, report in enumerate(self._reports):
            if report.id == report_id:
                return index, report
        raise NotFound(report_id)

    def __len__(self) -> int:
        return len(self._reports)

    # --- Selection -------------------------------------------------------

    @property
    def selected(self) -> Optional[Report]:
        return self.selected_for(DEFAULT_VIEW)

    def selected_for(self, owner: str) -> Optional[Report]:
        return self._selections.get(owner)

    def select(self, report_id: int, owner: str = DEFAULT_VIEW) -> Report:
        report = self.get(report_id)
        self._selections[owner] = report
        return report

    def clear_selection(self, owner: str = DEFAULT_VIEW) -> None:
        self._selections.pop(owner, None)

    def _refresh_selection(self) -> None:
        current = {r.id: r for r in self._reports}
        for owner, selected in list(self._selections.items()):
            report = current.get(selected.id)
            if report is None:
                del self._selections[owner]
            else:
                self._selections[owner] = report.model_copy()

    # --- Mutations -------------------------------------------------------

    def _next_id(self, now: datetime) -> int:
        # Creation-time based, strictly increasing within the process
        candidate = int(now.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def submit(self, form: ReportCreate, reporter_id: str, now: datetime) -> Report:
        now = ensure_aware(now)
        missing = [f for f in REQUIRED_FIELDS if not (getattr(form, f) or "").strip()]
        if missing:
            raise ValidationError(missing)

        deadline = compute_deadline(form.urgency, now)

        duplicate = find_duplicate(form, self._reports, now)
        if duplicate is not None:
            logger.info(
                "duplicate_report_rejected",
                existing_id=duplicate.id,
                building=form.building,
                floor=form.floor,
                room=form.room,
            )
            raise DuplicateReport(duplicate.id)

        report = Report(
            id=self._next_id(now),
            reporter_id=reporter_id,
            building=form.building,
            floor=form.floor,
            room=form.room,
            description=form.description.strip(),
            image=form.image,
            urgency=form.urgency,
            status=ReportStatus.SUBMITTED,
            created_at=now,
            deadline_at=deadline.deadline_at,
        )
        self._reports.insert(0, report)
        self.persist()

        logger.info(
            "report_submitted",
            report_id=report.id,
            reporter_id=reporter_id,
            urgency=report.urgency.value,
            deadline=deadline.deadline_date,
        )
        return report.model_copy()

    def _replace(self, index: int, updated: Report) -> Report:
        self._reports[index] = updated
        self._refresh_selection()
        self.persist()
        return updated.model_copy()

    def update_status(self, report_id: int, new_status: ReportStatus, now: datetime) -> Report:
        now = ensure_aware(now)
        index, report = self._find(report_id)
        new_status = ReportStatus(new_status)

        changes: Dict[str, Any] = {"status": new_status}
        if new_status == ReportStatus.COMPLETED:
            changes["completed_at"] = now

        logger.info(
            "report_status_updated",
            report_id=report_id,
            old_status=report.status.value,
            new_status=new_status.value,
        )
        return self._replace(index, report.model_copy(update=changes))

    def update_deadline(self, report_id: int, raw_date: Optional[str]) -> Report:
        """Set the deadline from a typed date.

        An empty value clears the deadline; a value that cannot be
        normalized is ignored and the report is returned unchanged.
        """
        index, report = self._find(report_id)

        if raw_date is None or not str(raw_date).strip():
            logger.info("report_deadline_cleared", report_id=report_id)
            return self._replace(index, report.model_copy(update={"deadline_at": None}))

        try:
            canonical = dates.normalize_strict(raw_date)
        except UnparsableDate:
            logger.warning("deadline_update_ignored", report_id=report_id, raw=str(raw_date))
            return report.model_copy()

        logger.info("report_deadline_updated", report_id=report_id, deadline=canonical)
        return self._replace(
            index, report.model_copy(update={"deadline_at": dates.local_midnight(canonical)})
        )
