"""
History aggregation for the weekly and monthly intake charts.

All functions are pure over a Ledger snapshot. Percentages are capped at
100 for display; raw intake values are never capped.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from hydration_tracker.models.history import DailySummary
from hydration_tracker.models.intake import DailyRecord, Ledger
from hydration_tracker.utils.datetime_helpers import (
    ClockFn,
    LocalDateFn,
    add_months,
    days_in_month,
    format_calendar_date,
    parse_calendar_date,
    start_of_week,
    system_clock_ms,
)
from hydration_tracker.utils.formatters import progress_percent

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _summary(ledger: Ledger, day: date, label: str, daily_goal_ml: float, today: Optional[date]) -> DailySummary:
    date_str = format_calendar_date(day)
    intake = ledger.intake_for(date_str)
    return DailySummary(
        date=date_str,
        label=label,
        intake_ml=intake,
        percent_of_goal=progress_percent(intake, daily_goal_ml),
        is_today=today is not None and day == today,
    )


def weekly_view(ledger: Ledger, week_start: date, daily_goal_ml: float, today: Optional[date] = None) -> list[DailySummary]:
    """Seven daily summaries starting at week_start; missing days have zero intake"""
    entries = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        entries.append(_summary(ledger, day, WEEKDAY_LABELS[day.weekday()], daily_goal_ml, today))
    return entries


def monthly_view(ledger: Ledger, year: int, month: int, daily_goal_ml: float, today: Optional[date] = None) -> list[DailySummary]:
    """One summary per day of the month, labelled by day-of-month"""
    return [
        _summary(ledger, date(year, month, day), str(day), daily_goal_ml, today)
        for day in range(1, days_in_month(year, month) + 1)
    ]


def total_for_period(entries: Iterable[DailySummary]) -> float:
    return sum(entry.intake_ml for entry in entries)


def average_for_period(entries: Iterable[DailySummary]) -> float:
    """Average daily intake over every day of the period, including empty days"""
    entries = list(entries)
    if not entries:
        return 0.0
    return total_for_period(entries) / len(entries)


def days_goal_reached(entries: Iterable[DailySummary], daily_goal_ml: float) -> int:
    return sum(1 for entry in entries if entry.intake_ml >= daily_goal_ml)


# Period navigation

def previous_week(week_start: date) -> date:
    return week_start - timedelta(days=7)


def next_week(week_start: date) -> date:
    return week_start + timedelta(days=7)


def previous_month(year: int, month: int) -> tuple[int, int]:
    return add_months(year, month, -1)


def next_month(year: int, month: int) -> tuple[int, int]:
    return add_months(year, month, 1)


def week_label(week_start: date) -> str:
    """e.g. 'Dec 30 - Jan 5, 2025'"""
    week_end = week_start + timedelta(days=6)
    return (
        f"{MONTH_ABBREVIATIONS[week_start.month - 1]} {week_start.day} - "
        f"{MONTH_ABBREVIATIONS[week_end.month - 1]} {week_end.day}, {week_end.year}"
    )


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def recent_days(ledger: Ledger, limit: int = 7) -> list[DailyRecord]:
    """Most recent daily records first"""
    return sorted(ledger.records, key=lambda r: r.calendar_date, reverse=True)[:limit]


class HistoryService:
    """
    Chart views bound to the current ledger, goal and clock.

    Responsibilities:
    - Current week (Monday start) and month views
    - Period summaries for the history screen
    """

    def __init__(self, ledger_service, profile_store, date_fn: LocalDateFn, clock: ClockFn = system_clock_ms):
        self.ledger_service = ledger_service
        self.profile_store = profile_store
        self.date_fn = date_fn
        self.clock = clock

    def today(self) -> date:
        return parse_calendar_date(self.date_fn(self.clock()))

    async def _snapshot(self) -> tuple[Ledger, float]:
        ledger = await self.ledger_service.get_ledger()
        profile = await self.profile_store.get()
        return ledger, profile.daily_goal.milliliters

    async def week(self, week_start: Optional[date] = None) -> list[DailySummary]:
        ledger, goal_ml = await self._snapshot()
        today = self.today()
        return weekly_view(ledger, week_start or start_of_week(today), goal_ml, today)

    async def month(self, year: Optional[int] = None, month: Optional[int] = None) -> list[DailySummary]:
        ledger, goal_ml = await self._snapshot()
        today = self.today()
        return monthly_view(ledger, year or today.year, month or today.month, goal_ml, today)

    async def period_summary(self, entries: list[DailySummary]) -> dict:
        """Total, average and goal-reached count for a week or month view"""
        profile = await self.profile_store.get()
        goal_ml = profile.daily_goal.milliliters
        return {
            "total_ml": total_for_period(entries),
            "average_ml": average_for_period(entries),
            "days_goal_reached": days_goal_reached(entries, goal_ml),
            "days": len(entries),
        }
