"""Report model - facility fault reports"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class ReportStatus(str, Enum):
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    COMPLETED = "completed"


class ReportBase(SQLModel):
    # Location key: building + floor + room
    building: str = ""
    floor: str = ""
    room: str = ""

    description: str = ""
    image: Optional[str] = None  # opaque payload reference (e.g. data URL)
    urgency: Urgency = Field(default=Urgency.NORMAL)


class Report(ReportBase):
    id: int
    reporter_id: str

    status: ReportStatus = Field(default=ReportStatus.SUBMITTED)
    created_at: datetime
    deadline_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator("created_at", "deadline_at", "completed_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Records written without an offset are UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReportCreate(ReportBase):
    """Form intake from the presentation layer"""
    pass


class ReportRead(Report):
    """Report plus the display renderings the UI shows"""
    created_display: str = ""
    deadline_display: str = ""
    deadline_input: str = ""
    completed_display: str = ""


class StatusUpdate(SQLModel):
    status: ReportStatus


class DeadlineUpdate(SQLModel):
    deadline: str = ""  # "" clears the deadline
