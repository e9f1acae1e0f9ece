"""Shift window normalization: clock times to absolute instants and net hours."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from utils.time import parse_clock_time
from .types import ShiftRecord


@dataclass(frozen=True)
class NormalizedShift:
    """A shift with absolute start/end instants. Derived, never persisted."""
    shift: ShiftRecord
    start: datetime
    end: datetime
    duration_hours: float

    @property
    def id(self) -> str:
        return self.shift.id

    @property
    def worker_id(self) -> str:
        return self.shift.worker_id

    @property
    def is_overnight(self) -> bool:
        return self.end.date() > self.start.date()


def normalize_shift(shift: ShiftRecord) -> NormalizedShift:
    """
    Convert a shift record into absolute instants.

    An end hour numerically before the start hour marks an overnight shift,
    so the end instant moves to the next calendar day. Net duration has the
    break deducted and is floored at zero.
    """
    shift_date = shift.shift_date
    start_clock = parse_clock_time(shift.start_time)
    end_clock = parse_clock_time(shift.end_time)

    start = datetime.combine(shift_date, start_clock)
    end = datetime.combine(shift_date, end_clock)
    if end_clock.hour < start_clock.hour:
        end += timedelta(days=1)

    worked_minutes = (end - start).total_seconds() / 60 - shift.break_minutes

    return NormalizedShift(
        shift=shift,
        start=start,
        end=end,
        duration_hours=max(0.0, worked_minutes) / 60,
    )
