"""
UTC datetime utilities for consistent timezone handling.

All datetime values produced by the system are timezone-aware UTC. Stored
documents are less disciplined: a date may arrive as a Firestore timestamp,
a {"seconds": ...} map, an ISO string, a bare "YYYY-MM-DD" day, or epoch
milliseconds. parse_datetime() is the single place that reads all of them.
"""

import math
from datetime import UTC, date, datetime, timedelta
from typing import Any


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def today_utc() -> date:
    """Return the current calendar day in UTC."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Create a UTC-aware datetime from a Unix timestamp in seconds."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def to_timestamp_ms(dt: datetime) -> int:
    """Milliseconds since epoch (used for client-visible generated ids)."""
    return int(ensure_utc(dt).timestamp() * 1000)


def parse_datetime(value: Any) -> datetime | None:
    """
    Read a date-like value from a stored document.

    Accepts datetime, date, {"seconds": n[, "nanoseconds": m]} maps, ISO-8601
    strings (with or without time, "Z" suffix allowed) and epoch numbers
    (values above 1e11 are taken as milliseconds). Anything unparseable
    returns None rather than raising: documents are not validated on write.

    Returns:
        UTC-aware datetime or None
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        if not _is_number(seconds) or not _is_number(nanos):
            return None
        return _from_epoch(seconds, nanos)
    if _is_number(value):
        return _from_epoch(value, millis_above=1e11)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _from_epoch(seconds: float, nanos: float = 0, millis_above: float | None = None) -> datetime | None:
    # Out-of-range and non-finite epochs read as unparseable.
    try:
        timestamp = float(seconds) + nanos / 1e9
        if millis_above is not None and timestamp > millis_above:
            timestamp /= 1000
        if not math.isfinite(timestamp):
            return None
        return from_timestamp_utc(timestamp)
    except (OverflowError, OSError, ValueError):
        return None


def parse_day(value: Any) -> date | None:
    """Calendar day of a date-like value (time of day dropped)."""
    dt = parse_datetime(value)
    return dt.date() if dt else None


def iso_day(value: Any) -> str:
    """Return 'YYYY-MM-DD' for a date-like value, or '' when unparseable."""
    day = parse_day(value)
    return day.isoformat() if day else ""


def month_bounds(month: str) -> tuple[date, date] | None:
    """
    Return [start, end) days for a 'YYYY-MM' month string.

    Returns:
        (first day of month, first day of next month) or None if malformed
    """
    try:
        start = datetime.strptime(f"{month}-01", "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None
    end = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    return start, end
