"""Time-related utility functions."""

import re
from datetime import date, datetime, time, timezone

_CLOCK_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def parse_clock_time(time_str: str) -> time:
    """Parse an "HH:MM" clock string, rejecting anything else."""
    match = _CLOCK_PATTERN.match(time_str.strip()) if time_str else None
    if not match:
        raise ValueError(f"Invalid clock time {time_str!r}, expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def parse_time_to_minutes(time_str: str) -> int:
    t = parse_clock_time(time_str)
    return t.hour * 60 + t.minute


def parse_iso_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def to_wall_clock(value: datetime) -> datetime:
    """Drop tzinfo so the instant compares with naive local shift times."""
    return value.replace(tzinfo=None)
