"""Buildings API - campus catalog and per-building summaries for the map"""
from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from facility_reports.api.deps import get_now, get_report_store, get_viewer
from facility_reports.api.v1.reports import get_report_filter
from facility_reports.domain.catalog import BUILDING_COORDINATES, BUILDINGS, CAMPUS_CENTER, FLOORS
from facility_reports.domain.filter_engine import ReportFilter, filter_reports
from facility_reports.domain.identity import Viewer
from facility_reports.domain.models import BuildingSummary, Coordinates, ReportRead
from facility_reports.domain.presentation import present_report
from facility_reports.domain.report_store import ReportStore
from facility_reports.domain.stats import summarize_buildings

router = APIRouter()


class CatalogRead(BaseModel):
    buildings: List[str]
    floors: List[str]
    coordinates: Dict[str, Coordinates]
    center: Coordinates


@router.get("/", response_model=CatalogRead)
async def get_catalog():
    return CatalogRead(
        buildings=BUILDINGS,
        floors=FLOORS,
        coordinates=BUILDING_COORDINATES,
        center=CAMPUS_CENTER,
    )


@router.get("/summary", response_model=List[BuildingSummary])
async def get_building_summaries(
    criteria: ReportFilter = Depends(get_report_filter),
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """Per-building counts and marker priority over the visible reports"""
    reports = filter_reports(store.all(), viewer, now, criteria)
    return summarize_buildings(reports, BUILDING_COORDINATES)


@router.get("/{building}/reports", response_model=List[ReportRead])
async def list_building_reports(
    building: str,
    viewer: Viewer = Depends(get_viewer),
    store: ReportStore = Depends(get_report_store),
    now: datetime = Depends(get_now),
):
    """Reports shown when a building marker is clicked"""
    reports = filter_reports(store.all(), viewer, now, ReportFilter(building=building))
    return [present_report(r) for r in reports]
