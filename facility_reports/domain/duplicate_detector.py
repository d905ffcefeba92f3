"""Duplicate submission detection.

A new report is a resubmission of an existing one when the same location
key was reported less than the window ago *and* on the same local calendar
day.
"""
from datetime import datetime, timedelta
from typing import Iterable, Optional

from facility_reports.config import settings
from facility_reports.domain.clock import ensure_aware, to_local
from facility_reports.domain.models.report import Report, ReportBase


def is_duplicate_of(
    candidate: ReportBase,
    existing: Report,
    now: datetime,
    window: Optional[timedelta] = None,
) -> bool:
    if window is None:
        window = timedelta(seconds=settings.duplicate_window_seconds)

    now = ensure_aware(now)
    within_window = abs(now - existing.created_at) < window
    same_spot = (
        existing.building == candidate.building
        and existing.floor == candidate.floor
        and existing.room == candidate.room
    )
    same_day = to_local(existing.created_at).date() == to_local(now).date()
    return within_window and same_spot and same_day


def find_duplicate(
    candidate: ReportBase,
    existing_reports: Iterable[Report],
    now: datetime,
    window: Optional[timedelta] = None,
) -> Optional[Report]:
    """First report in collection order that ``candidate`` duplicates."""
    for report in existing_reports:
        if is_duplicate_of(candidate, report, now, window):
            return report
    return None
