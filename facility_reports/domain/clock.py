"""Campus-local time helpers"""
from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

from facility_reports.config import settings


@lru_cache
def campus_zone() -> ZoneInfo:
    return ZoneInfo(settings.campus_timezone)


def now() -> datetime:
    """Current time as an aware datetime in the campus time zone."""
    return datetime.now(campus_zone())


def to_local(dt: datetime) -> datetime:
    """Convert to campus-local time. Naive values are assumed to be UTC."""
    return ensure_aware(dt).astimezone(campus_zone())


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to naive values, matching how stored reports read them."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
