"""Statistics models - status counts, location rankings, building summaries"""
from typing import Dict, List, Optional

from sqlmodel import SQLModel, Field


class LocationCount(SQLModel):
    location: str  # "{building} {floor}"
    count: int


class ReportStats(SQLModel):
    status_counts: Dict[str, int] = Field(default_factory=dict)
    top_locations: List[LocationCount] = Field(default_factory=list)


class Coordinates(SQLModel):
    lat: float
    lng: float


class BuildingSummary(SQLModel):
    building: str
    count: int = 0
    submitted: int = 0
    processing: int = 0
    completed: int = 0
    has_urgent: bool = False
    has_high: bool = False
    coordinates: Optional[Coordinates] = None
    priority: str = "normal"  # urgent > busy > high > normal
