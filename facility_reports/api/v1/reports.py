"""Reports API - submission, listing, administrator status/deadline edits"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from facility_reports.api.deps import (
    get_now,
    get_report_store,
    get_session_token,
    get_viewer,
    require_admin,
)
from facility_reports.domain.errors import (
    DuplicateReport,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from facility_reports.domain.filter_engine import (
    ALL,
    DateRange,
    ReportFilter,
    ensure_visible,
    filter_reports,
    visible_to,
)
from facility_reports.domain.identity import Viewer
from facility_reports.domain.models import (
    DeadlineUpdate,
    ReportCreate,
    ReportRead,
    ReportStats,
    StatusUpdate,
)
from facility_reports.domain.presentation import present_report
from facility_reports.domain.report_store import ReportStore
from facility_reports.domain.stats import STUDENT_TOP_LOCATIONS, aggregate

router = APIRouter()


def get_report_filter(
    status: str = ALL,
    building: str = ALL,
    date_range: DateRange = DateRange.ALL,
    q: str = "",
) -> ReportFilter:
    return ReportFilter(status=status, building=building, date_range=date_range, query=q)


def _get_visible(store: ReportStore, report_id: int, viewer: Viewer):
    try:
        return ensure_visible(store.get(report_id), viewer)
    except NotFound:
        raise HTTPException(status_code=404, detail="Report not found")
    except PermissionDenied:
        raise HTTPException(status_code=403, detail="Report belongs to another reporter")


@router.post("/", response_model=ReportRead, status_code=201)
async def submit_report(
    form: ReportCreate,
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """
    Submit a fault report
    Rejected with 409 when the same location was reported within the last hour
    """
    try:
        report = store.submit(form, viewer.user_id, now)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "fields": e.fields})
    except DuplicateReport as e:
        raise HTTPException(
            status_code=409,
            detail={"message": str(e), "existing_id": e.existing_id},
        )

    return present_report(report)


@router.get("/", response_model=List[ReportRead])
async def list_reports(
    criteria: ReportFilter = Depends(get_report_filter),
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """List visible reports, most recent first"""
    reports = filter_reports(store.all(), viewer, now, criteria)
    return [present_report(r) for r in reports]


@router.get("/stats/summary", response_model=ReportStats)
async def get_report_stats(
    top: Optional[int] = Query(None, ge=1),
    criteria: ReportFilter = Depends(get_report_filter),
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """Status counts and most reported locations"""
    if top is None and not viewer.is_admin:
        top = STUDENT_TOP_LOCATIONS
    reports = filter_reports(store.all(), viewer, now, criteria)
    return aggregate(reports, top)


@router.get("/selected", response_model=Optional[ReportRead])
async def get_selected_report(
    token: str = Depends(get_session_token),
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
):
    """Report this session last selected (map or list click), if any"""
    selected = store.selected_for(token)
    if selected is None or not visible_to(selected, viewer):
        return None
    return present_report(selected)


@router.get("/{report_id}", response_model=ReportRead)
async def get_report(
    report_id: int,
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
):
    """Get a specific report by ID"""
    return present_report(_get_visible(store, report_id, viewer))


@router.post("/{report_id}/select", response_model=ReportRead)
async def select_report(
    report_id: int,
    token: str = Depends(get_session_token),
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
):
    _get_visible(store, report_id, viewer)
    return present_report(store.select(report_id, owner=token))


@router.patch("/{report_id}/status", response_model=ReportRead)
async def update_report_status(
    report_id: int,
    update: StatusUpdate,
    admin: Viewer = Depends(require_admin),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """Change status; moving to completed stamps completed_at"""
    try:
        report = store.update_status(report_id, update.status, now)
    except NotFound:
        raise HTTPException(status_code=404, detail="Report not found")
    return present_report(report)


@router.patch("/{report_id}/deadline", response_model=ReportRead)
async def update_report_deadline(
    report_id: int,
    update: DeadlineUpdate,
    admin: Viewer = Depends(require_admin),
    store: ReportStore = Depends(get_report_store),
):
    """
    Set the deadline from a typed date
    Empty clears it; an unreadable date leaves the report unchanged
    """
    try:
        report = store.update_deadline(report_id, update.deadline)
    except NotFound:
        raise HTTPException(status_code=404, detail="Report not found")
    return present_report(report)
