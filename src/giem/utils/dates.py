"""
Date helpers for delivery dates.

Stored values are UTC ISO strings. The review form edits a naive, minute
precision datetime in the local timezone (GIEM_TIMEZONE); naive inputs coming
from the extractor are read in that same timezone.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from dateutil import parser as dtparser
from dateutil import tz

from giem.utils.config import TIMEZONE

LOCAL_TZ = tz.gettz(TIMEZONE) or tz.UTC


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_utc_iso() -> str:
    return now_utc().isoformat()


def parse_datetime(val) -> Optional[datetime]:
    """Parse an ISO-ish string (or datetime) into an aware datetime; None when invalid."""
    if val is None:
        return None
    if isinstance(val, datetime):
        dt = val
    else:
        s = str(val).strip()
        if not s:
            return None
        try:
            dt = dtparser.parse(s)
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=LOCAL_TZ)
    return dt


def to_local_input(val) -> Optional[datetime]:
    """ISO string -> naive local datetime truncated to minutes (form value)."""
    dt = parse_datetime(val)
    if dt is None:
        return None
    return dt.astimezone(LOCAL_TZ).replace(tzinfo=None, second=0, microsecond=0)


def local_now_input() -> datetime:
    return to_local_input(now_utc())


def local_input_to_iso(val: Optional[datetime]) -> Optional[str]:
    """Naive local form value -> UTC ISO string."""
    if val is None:
        return None
    if val.tzinfo is None:
        val = val.replace(tzinfo=LOCAL_TZ)
    return val.astimezone(timezone.utc).isoformat()


def day_bounds(day: date) -> Tuple[str, str]:
    """Start and end of a UTC day, as used by the date filter."""
    d = day.isoformat()
    return f"{d}T00:00:00.000Z", f"{d}T23:59:59.999Z"


def month_bounds(day: date) -> Tuple[str, str]:
    first = day.replace(day=1)
    nxt = (first + timedelta(days=32)).replace(day=1)
    last = nxt - timedelta(days=1)
    return day_bounds(first)[0], day_bounds(last)[1]


def format_br_date(val) -> str:
    dt = parse_datetime(val)
    return dt.astimezone(LOCAL_TZ).strftime("%d/%m/%Y") if dt else "—"


def format_br_time(val) -> str:
    dt = parse_datetime(val)
    return dt.astimezone(LOCAL_TZ).strftime("%H:%M") if dt else "—"
