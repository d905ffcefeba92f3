"""Report list filtering.

Filters only narrow the input; the result keeps the input (store) order.
"""
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from facility_reports.domain.clock import ensure_aware
from facility_reports.domain.errors import PermissionDenied
from facility_reports.domain.identity import Viewer
from facility_reports.domain.models.report import Report, ReportStatus

ALL = "all"


class DateRange(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


# Largest whole-day age kept by each range
MAX_AGE_DAYS = {
    DateRange.TODAY: 0,
    DateRange.WEEK: 7,
    DateRange.MONTH: 30,
}


class ReportFilter(BaseModel):
    status: Union[ReportStatus, str] = ALL
    building: str = ALL
    date_range: DateRange = DateRange.ALL
    query: str = ""


def days_since(created_at: datetime, now: datetime) -> int:
    return (ensure_aware(now) - created_at) // timedelta(days=1)


def visible_to(report: Report, viewer: Viewer) -> bool:
    return viewer.is_admin or report.reporter_id == viewer.user_id


def matches_query(report: Report, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    return (
        q in report.building.lower()
        or q in report.floor.lower()
        or q in report.room.lower()
        or q in report.description.lower()
        or q in str(report.id)
    )


def matches(report: Report, criteria: ReportFilter, now: datetime) -> bool:
    if criteria.status != ALL and report.status != criteria.status:
        return False
    if criteria.building != ALL and report.building != criteria.building:
        return False
    if criteria.date_range != DateRange.ALL:
        if days_since(report.created_at, now) > MAX_AGE_DAYS[criteria.date_range]:
            return False
    return matches_query(report, criteria.query)


def filter_reports(
    reports: Iterable[Report],
    viewer: Viewer,
    now: datetime,
    criteria: Optional[ReportFilter] = None,
) -> List[Report]:
    criteria = criteria or ReportFilter()
    return [
        r for r in reports
        if visible_to(r, viewer) and matches(r, criteria, now)
    ]


def ensure_visible(report: Report, viewer: Viewer) -> Report:
    if not visible_to(report, viewer):
        raise PermissionDenied(f"Report {report.id} belongs to another reporter")
    return report
