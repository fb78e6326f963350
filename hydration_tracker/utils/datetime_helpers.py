"""
Date/Time Handling Utilities

Calendar dates for the intake ledger are local dates ("YYYY-MM-DD") in the
user's timezone. Deriving them goes through an explicit date function so
callers (and tests) never depend on the host machine's timezone.

RULES:
- Intake timestamps are epoch milliseconds
- Calendar dates are derived with a LocalDateFn built for the user's zone
- Week navigation steps 7 days, month navigation steps one calendar month
"""

import calendar
import logging
import time
from datetime import date, datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo
import pytz

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

# epoch millis -> "YYYY-MM-DD"
LocalDateFn = Callable[[int], str]
# -> epoch millis
ClockFn = Callable[[], int]


def get_zone(tz_name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone, falling back to UTC when unknown

    Args:
        tz_name: IANA timezone string (e.g., "Europe/Stockholm")

    Returns:
        ZoneInfo for the timezone
    """
    try:
        pytz.timezone(tz_name)
        return ZoneInfo(tz_name)
    except pytz.exceptions.UnknownTimeZoneError:
        logger.error(f"Invalid timezone '{tz_name}', using {DEFAULT_TIMEZONE}")
        return ZoneInfo(DEFAULT_TIMEZONE)


def make_local_date_fn(tz_name: str = DEFAULT_TIMEZONE) -> LocalDateFn:
    """
    Build a function converting epoch millis to a local calendar date string

    Example:
        >>> to_date = make_local_date_fn("America/New_York")
        >>> to_date(1704085200000)  # 2024-01-01T05:00Z
        '2024-01-01'
    """
    zone = get_zone(tz_name)

    def to_local_date(timestamp_ms: int) -> str:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=zone).strftime("%Y-%m-%d")

    return to_local_date


def system_clock_ms() -> int:
    """Current time as epoch milliseconds"""
    return time.time_ns() // 1_000_000


def parse_calendar_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_calendar_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def start_of_week(value: date) -> date:
    """Monday of the week containing value"""
    return value - timedelta(days=value.weekday())


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """
    Shift a (year, month) pair by delta calendar months

    Example:
        >>> add_months(2025, 1, -1)
        (2024, 12)
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]
