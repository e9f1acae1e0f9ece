"""Raw fatigue metrics over a worker's recent shift history."""

from datetime import datetime, timedelta

import config
from roster.normalizer import NormalizedShift, normalize_shift
from roster.types import ShiftRecord
from utils.time import parse_clock_time, to_wall_clock
from .types import FatigueMetrics, FatigueRuleConfig

WEEK = timedelta(days=7)


def recent_worker_shifts(
    worker_id: str,
    all_shifts: list[ShiftRecord],
    reference: datetime,
    lookback_days: int = config.FATIGUE_LOOKBACK_DAYS,
) -> list[NormalizedShift]:
    """Normalized shifts for the worker starting inside the lookback window, oldest first."""
    reference = to_wall_clock(reference)
    window_start = reference - timedelta(days=lookback_days)
    shifts = [normalize_shift(s) for s in all_shifts if s.worker_id == worker_id]
    recent = [s for s in shifts if window_start <= s.start <= reference]
    return sorted(recent, key=lambda s: s.start)


def _in_last_week(shift: NormalizedShift, reference: datetime) -> bool:
    reference = to_wall_clock(reference)
    return reference - WEEK <= shift.start <= reference


def get_weekly_hours(shifts: list[NormalizedShift], reference: datetime) -> float:
    return sum(s.duration_hours for s in shifts if _in_last_week(s, reference))


def get_consecutive_work_days(shifts: list[NormalizedShift]) -> int:
    """Longest run of calendar days with at least one shift start."""
    work_days = sorted({s.start.date() for s in shifts})
    if not work_days:
        return 0

    longest = current = 1
    for prev_day, day in zip(work_days, work_days[1:]):
        if (day - prev_day).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest


def _hour_in_window(hour: int, start: int, end: int, closed_end: bool) -> bool:
    # The window wraps midnight when it starts later than it ends
    if start <= end:
        return start < hour <= end if closed_end else start <= hour < end
    if closed_end:
        return hour > start or hour <= end
    return hour >= start or hour < end


def is_night_shift(shift: NormalizedShift, rules: FatigueRuleConfig) -> bool:
    night_start = parse_clock_time(rules.night_shift_start).hour
    night_end = parse_clock_time(rules.night_shift_end).hour
    start_hour = shift.start.hour
    end_hour = shift.end.hour

    return (
        _hour_in_window(start_hour, night_start, night_end, closed_end=False)
        or _hour_in_window(end_hour, night_start, night_end, closed_end=True)
        or end_hour < start_hour
    )


def get_night_shift_count(
    shifts: list[NormalizedShift],
    reference: datetime,
    rules: FatigueRuleConfig,
) -> int:
    return sum(1 for s in shifts if _in_last_week(s, reference) and is_night_shift(s, rules))


def get_rest_gaps(shifts: list[NormalizedShift]) -> list[float]:
    """Positive gaps in hours between the end of each shift and the start of the next."""
    ordered = sorted(shifts, key=lambda s: s.start)
    gaps = []
    for prev_shift, shift in zip(ordered, ordered[1:]):
        rest_hours = (shift.start - prev_shift.end).total_seconds() / 3600
        if rest_hours > 0:
            gaps.append(round(rest_hours, 2))
    return gaps


def calculate_fatigue_metrics(
    worker_id: str,
    all_shifts: list[ShiftRecord],
    rules: FatigueRuleConfig,
    reference: datetime,
    lookback_days: int = config.FATIGUE_LOOKBACK_DAYS,
) -> FatigueMetrics:
    shifts = recent_worker_shifts(worker_id, all_shifts, reference, lookback_days)
    gaps = get_rest_gaps(shifts)

    return FatigueMetrics(
        weekly_hours=get_weekly_hours(shifts, reference),
        consecutive_days=get_consecutive_work_days(shifts),
        night_shift_count=get_night_shift_count(shifts, reference, rules),
        min_rest_hours=min(gaps) if gaps else None,
        avg_rest_hours=round(sum(gaps) / len(gaps), 1) if gaps else None,
        shift_ids=tuple(s.id for s in shifts),
    )
