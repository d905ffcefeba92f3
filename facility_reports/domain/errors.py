"""Domain errors for the report lifecycle.

All of these are local and recoverable; the presentation layer decides how
to render them.
"""
from typing import Iterable, List


class FacilityReportError(Exception):
    """Base class for report engine errors"""


class ValidationError(FacilityReportError):
    """Required submission or login field missing/blank"""

    def __init__(self, fields: Iterable[str], message: str = "Required fields are missing"):
        self.fields: List[str] = list(fields)
        super().__init__(f"{message}: {', '.join(self.fields)}")


class DuplicateReport(FacilityReportError):
    """Same location was reported within the duplicate window"""

    def __init__(self, existing_id: int):
        self.existing_id = existing_id
        super().__init__(f"A report for this location was submitted recently (report #{existing_id})")


class NotFound(FacilityReportError):
    def __init__(self, report_id: int):
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


class UnparsableDate(FacilityReportError):
    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"Cannot interpret {raw!r} as a calendar date")


class StorageCorrupt(FacilityReportError):
    """Persisted collection is not valid serialized data"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored value under {key!r} is unreadable: {reason}")


class PermissionDenied(FacilityReportError):
    """Administrator-only operation attempted by a regular reporter"""
