"""Derived statistics over a (possibly filtered) report collection"""
from typing import Dict, Iterable, List, Mapping, Optional

from facility_reports.config import settings
from facility_reports.domain.models.report import Report, ReportStatus, Urgency
from facility_reports.domain.models.stats import (
    BuildingSummary,
    Coordinates,
    LocationCount,
    ReportStats,
)

STUDENT_TOP_LOCATIONS = 5


def location_label(report: Report) -> str:
    return f"{report.building} {report.floor}"


def count_statuses(reports: Iterable[Report]) -> Dict[str, int]:
    counts = {status.value: 0 for status in ReportStatus}
    for report in reports:
        counts[ReportStatus(report.status).value] += 1
    return counts


def top_locations(reports: Iterable[Report], limit: int) -> List[LocationCount]:
    """Most reported "{building} {floor}" labels; ties keep first-seen order."""
    location_count: Dict[str, int] = {}
    for report in reports:
        label = location_label(report)
        location_count[label] = location_count.get(label, 0) + 1

    ranked = sorted(location_count.items(), key=lambda item: item[1], reverse=True)
    return [LocationCount(location=loc, count=n) for loc, n in ranked[:limit]]


def aggregate(reports: Iterable[Report], limit: Optional[int] = None) -> ReportStats:
    reports = list(reports)
    if limit is None:
        limit = settings.top_locations_limit
    return ReportStats(
        status_counts=count_statuses(reports),
        top_locations=top_locations(reports, limit),
    )


def _priority(summary: BuildingSummary, busy_threshold: int) -> str:
    # Map marker precedence: urgent > busy > high > normal
    if summary.has_urgent:
        return "urgent"
    if summary.count >= busy_threshold:
        return "busy"
    if summary.has_high:
        return "high"
    return "normal"


def summarize_buildings(
    reports: Iterable[Report],
    coordinates: Mapping[str, Coordinates],
    busy_threshold: Optional[int] = None,
) -> List[BuildingSummary]:
    """Per-building tallies for the campus map.

    Buildings without known coordinates are left out; order is the order in
    which buildings first appear in ``reports``.
    """
    if busy_threshold is None:
        busy_threshold = settings.busy_building_threshold

    summaries: Dict[str, BuildingSummary] = {}
    for report in reports:
        summary = summaries.get(report.building)
        if summary is None:
            summary = summaries[report.building] = BuildingSummary(building=report.building)

        summary.count += 1
        status = ReportStatus(report.status).value
        setattr(summary, status, getattr(summary, status) + 1)
        if report.urgency == Urgency.URGENT:
            summary.has_urgent = True
        if report.urgency == Urgency.HIGH:
            summary.has_high = True

    result = []
    for summary in summaries.values():
        coords = coordinates.get(summary.building)
        if coords is None:
            continue
        summary.coordinates = coords
        summary.priority = _priority(summary, busy_threshold)
        result.append(summary)
    return result
