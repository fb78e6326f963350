"""Formatters for water amounts, goals and history summaries"""
from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from hydration_tracker.models.history import DailySummary
from hydration_tracker.models.profile import DisplayUnit, WaterGoal
from hydration_tracker.models.reminder import ReminderTime
from hydration_tracker.utils.goal_calculator import ML_PER_OZ, round_half_up


def format_amount(ml: float, display_unit: DisplayUnit) -> str:
    """
    Format a milliliter quantity for display.

    Examples:
        >>> format_amount(2450, DisplayUnit.ML)
        '2.5L'
        >>> format_amount(2450, DisplayUnit.OZ)
        '83 oz'
    """
    if display_unit == DisplayUnit.ML:
        return f"{round_half_up(ml / 100) / 10:.1f}L"
    return f"{round_half_up(ml / ML_PER_OZ)} oz"


def format_goal(goal: WaterGoal, display_unit: DisplayUnit) -> str:
    """Format the stored goal fields ('2.5L' or '82.8 oz')"""
    if display_unit == DisplayUnit.ML:
        return f"{goal.liters}L"
    return f"{goal.ounces} oz"


def progress_percent(intake_ml: float, goal_ml: float) -> float:
    """Share of the goal reached, capped at 100"""
    if goal_ml <= 0:
        return 0.0
    return min(intake_ml / goal_ml * 100, 100.0)


def format_progress(intake_ml: float, goal_ml: float) -> str:
    return f"{round_half_up(progress_percent(intake_ml, goal_ml))}%"


def format_reminder_time(reminder_time: ReminderTime) -> str:
    """24-hour reminder time on a 12-hour dial, e.g. '9:39 PM'"""
    hour12 = reminder_time.hour % 12 or 12
    meridiem = "AM" if reminder_time.hour < 12 else "PM"
    return f"{hour12}:{reminder_time.minute:02d} {meridiem}"


def format_event_time(timestamp_ms: int, tz: Optional[str] = None) -> str:
    """Clock time an intake event was logged at, e.g. '2:05 PM'"""
    zone = ZoneInfo(tz) if tz else None
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=zone)
    hour12 = moment.hour % 12 or 12
    return f"{hour12}:{moment.minute:02d} {'AM' if moment.hour < 12 else 'PM'}"


def format_period_summary(
    entries: Iterable[DailySummary],
    goal_ml: float,
    display_unit: DisplayUnit,
    title: str = "Summary",
) -> str:
    """
    Format the history summary card

    Args:
        entries: Daily summaries of one week or month
        goal_ml: Daily goal in ml
        display_unit: User's preferred unit
        title: Heading (e.g. the period label)

    Returns:
        Multi-line text with total, daily average and goal-reached days
    """
    from hydration_tracker.services.history_service import (
        average_for_period,
        days_goal_reached,
        total_for_period,
    )

    entries = list(entries)
    reached = days_goal_reached(entries, goal_ml)

    lines = [
        f"📊 {title}",
        f"Goal: {format_amount(goal_ml, display_unit)}",
        f"Total: {format_amount(total_for_period(entries), display_unit)}",
        f"Daily Average: {format_amount(average_for_period(entries), display_unit)}",
        f"Goal Reached: {reached}/{len(entries)} days",
    ]
    return "\n".join(lines)
