from .time import utc_now, parse_clock_time, parse_time_to_minutes, parse_iso_date, to_wall_clock
from .log import setup_logging

__all__ = [
    "utc_now",
    "parse_clock_time",
    "parse_time_to_minutes",
    "parse_iso_date",
    "to_wall_clock",
    "setup_logging",
]
