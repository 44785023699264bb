from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.utcnow()


def local_today() -> date:
    """Calendar date at the server's local clock (daily stats boundary)."""
    return datetime.now().date()


def local_day_bounds_utc(day: date) -> tuple[datetime, datetime]:
    """
    Convert a server-local calendar day into an inclusive [start, end] range of
    UTC-naive datetimes, matching how timestamps are stored.
    """
    start_local = datetime.combine(day, time.min).astimezone()
    end_local = datetime.combine(day, time.max).astimezone()
    start = start_local.astimezone(timezone.utc).replace(tzinfo=None)
    end = end_local.astimezone(timezone.utc).replace(tzinfo=None)
    return start, end


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")
