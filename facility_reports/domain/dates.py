"""Date normalization between stored, typed and displayed forms.

Canonical form is ``YYYY-MM-DD``. Inputs may be datetimes, ISO-8601 strings
(with or without time/offset) or loosely typed localized strings such as
``2025.3.5``, ``2025. 3. 5.`` or ``2025년 3월 5일``.

Nothing here raises on bad input except ``normalize_strict``; callers get
``None`` or ``""`` and fall back to their own defaults.
"""
import re
from datetime import date, datetime, time
from typing import Optional, Union

from facility_reports.domain.clock import campus_zone, to_local
from facility_reports.domain.errors import UnparsableDate

DateInput = Union[str, date, datetime, None]

CANONICAL_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# Year/month/day markers and punctuation all collapse to one separator
_SEPARATORS = re.compile(r"[년월일.,/\-\s]+")

DISPLAY_FORMAT = "{year}년 {month}월 {day}일"


def _from_tokens(text: str) -> Optional[str]:
    cleaned = _SEPARATORS.sub("-", text).strip("-")
    tokens = [t for t in cleaned.split("-") if t]
    if len(tokens) < 3:
        return None

    year, month, day = tokens[:3]
    if len(year) != 4 or not year.isdigit():
        return None
    if not (month.isdigit() and day.isdigit()) or len(month) > 2 or len(day) > 2:
        return None

    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def normalize(raw: DateInput) -> Optional[str]:
    """Return the canonical ``YYYY-MM-DD`` form of ``raw`` or ``None``."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return to_local(raw).date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    if CANONICAL_PATTERN.match(text):
        try:
            return date.fromisoformat(text).isoformat()
        except ValueError:
            return None

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _from_tokens(text)

    if parsed.tzinfo is not None:
        parsed = to_local(parsed)
    return parsed.date().isoformat()


def normalize_strict(raw: DateInput) -> str:
    canonical = normalize(raw)
    if canonical is None:
        raise UnparsableDate(raw)
    return canonical


def to_display(value: DateInput) -> str:
    """Long Korean rendering, e.g. ``2025년 3월 5일``."""
    if value is None or value == "":
        return ""
    if isinstance(value, (date, datetime)):
        canonical = normalize(value)
    else:
        canonical = str(value)

    try:
        parsed = date.fromisoformat(canonical)
    except ValueError:
        return canonical
    return DISPLAY_FORMAT.format(year=parsed.year, month=parsed.month, day=parsed.day)


def to_input_form(raw: DateInput) -> str:
    """Value for a ``<input type="date">``: canonical date or empty string."""
    return normalize(raw) or ""


def local_midnight(canonical: str) -> datetime:
    """Start of the given canonical day in campus-local time."""
    return datetime.combine(date.fromisoformat(canonical), time.min, tzinfo=campus_zone())
