"""Domain models for facility reports"""
from .report import (
    Report,
    ReportCreate,
    ReportRead,
    ReportStatus,
    Urgency,
    StatusUpdate,
    DeadlineUpdate,
)
from .stats import BuildingSummary, Coordinates, LocationCount, ReportStats
from .storage_record import StorageRecord

__all__ = [
    "Report",
    "ReportCreate",
    "ReportRead",
    "ReportStatus",
    "Urgency",
    "StatusUpdate",
    "DeadlineUpdate",
    "BuildingSummary",
    "Coordinates",
    "LocationCount",
    "ReportStats",
    "StorageRecord",
]
