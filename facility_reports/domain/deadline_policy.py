"""Urgency-driven deadline computation"""
from datetime import datetime, timedelta
from typing import Dict, NamedTuple, Union

from facility_reports.domain import dates
from facility_reports.domain.models.report import Urgency

# Days added to the reference time; fractions are kept at hour resolution
DEADLINE_DAYS: Dict[Urgency, float] = {
    Urgency.LOW: 14,
    Urgency.NORMAL: 7,
    Urgency.HIGH: 1,
    Urgency.URGENT: 0.5,
}


class Deadline(NamedTuple):
    deadline_at: datetime
    deadline_date: str  # canonical YYYY-MM-DD
    display_deadline: str


def compute_deadline(urgency: Union[Urgency, str], reference_time: datetime) -> Deadline:
    days = DEADLINE_DAYS[Urgency(urgency)]
    deadline_at = reference_time + timedelta(days=days)
    canonical = dates.normalize(deadline_at)
    return Deadline(
        deadline_at=deadline_at,
        deadline_date=canonical,
        display_deadline=dates.to_display(canonical),
    )
