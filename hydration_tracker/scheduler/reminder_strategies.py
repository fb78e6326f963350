"""
Reminder time derivation.

Two policies exist side by side and are deliberately kept separate:

EVENLY_SPACED
    count = max(3, active_hours // 2), interval = active_hours * 60 / count.
    First reminder 30 minutes after waking, then every interval. Times are
    rounded to the nearest minute; anything at or after bedtime is dropped.
    Works across midnight (bedtime earlier on the clock than wake time).
    Wake and bed in the same clock hour yield no reminders.

FIXED_INTERVAL
    One reminder every frequency_hours hours starting at the wake hour, at
    the wake minute, while the hour is before the bed hour. Does not wrap
    past midnight: a bedtime earlier on the clock yields no reminders.
"""
import logging
from typing import Optional

from hydration_tracker.models.profile import TimeOfDay
from hydration_tracker.models.reminder import ReminderStrategy, ReminderTime
from hydration_tracker.utils.goal_calculator import round_half_up

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
FIRST_REMINDER_DELAY_MINUTES = 30
MIN_REMINDERS = 3


def active_hours(wake_hour24: int, bed_hour24: int) -> int:
    """Whole hours between waking and bedtime, wrapping past midnight"""
    if bed_hour24 >= wake_hour24:
        return bed_hour24 - wake_hour24
    return 24 - wake_hour24 + bed_hour24


def evenly_spaced_times(wake_time: TimeOfDay, bed_time: TimeOfDay) -> list[ReminderTime]:
    """
    Evenly spaced reminders between waking and bedtime

    Example:
        7:00 AM -> 10:00 PM gives 15 active hours, 7 reminders every ~128.6
        minutes: 07:30, 09:39, 11:47, 13:56, 16:04, 18:13, 20:21
    """
    wake_hour, wake_minute = wake_time.to_24_hour()
    bed_hour, bed_minute = bed_time.to_24_hour()

    hours = active_hours(wake_hour, bed_hour)
    if hours == 0:
        # Wake and bed in the same clock hour: every slot would collapse onto one time
        logger.info(f"No whole active hours between {wake_time} and {bed_time}; nothing scheduled")
        return []

    reminders_count = max(MIN_REMINDERS, hours // 2)
    interval_minutes = hours * 60 / reminders_count

    wake_total = wake_hour * 60 + wake_minute
    bed_offset = (bed_hour * 60 + bed_minute - wake_total) % MINUTES_PER_DAY

    times = []
    for i in range(reminders_count):
        offset = round_half_up(FIRST_REMINDER_DELAY_MINUTES + i * interval_minutes)
        if offset >= bed_offset:
            continue
        total = (wake_total + offset) % MINUTES_PER_DAY
        times.append(ReminderTime(hour=total // 60, minute=total % 60))

    logger.debug(
        f"Evenly spaced: {hours}h awake, {reminders_count} slots, "
        f"{interval_minutes:.2f} min apart, {len(times)} kept"
    )
    return times


def fixed_interval_times(wake_time: TimeOfDay, bed_time: TimeOfDay, frequency_hours: int) -> list[ReminderTime]:
    """
    Reminders every frequency_hours from the wake hour until the bed hour

    Raises:
        ValueError: frequency_hours is less than 1
    """
    if frequency_hours < 1:
        raise ValueError(f"Reminder frequency must be at least 1 hour, got {frequency_hours}")

    wake_hour, wake_minute = wake_time.to_24_hour()
    bed_hour, _ = bed_time.to_24_hour()

    times = []
    current_hour = wake_hour
    while current_hour < bed_hour:
        times.append(ReminderTime(hour=current_hour, minute=wake_minute))
        current_hour += frequency_hours

    if bed_hour <= wake_hour:
        logger.info(
            f"Fixed-interval reminders do not wrap midnight "
            f"(wake {wake_time}, bed {bed_time}); nothing scheduled"
        )
    return times


def compute_reminder_times(
    wake_time: TimeOfDay,
    bed_time: TimeOfDay,
    frequency_hours: Optional[int] = None,
    strategy: ReminderStrategy = ReminderStrategy.EVENLY_SPACED,
) -> list[ReminderTime]:
    """
    Derive the ordered daily reminder times for a strategy

    Args:
        wake_time: Wake-up time
        bed_time: Bedtime
        frequency_hours: Step for FIXED_INTERVAL (ignored by EVENLY_SPACED)
        strategy: Which policy to apply

    Raises:
        ValueError: FIXED_INTERVAL without a frequency
    """
    if strategy == ReminderStrategy.EVENLY_SPACED:
        return evenly_spaced_times(wake_time, bed_time)

    if frequency_hours is None:
        raise ValueError("frequency_hours is required for the fixed_interval strategy")
    return fixed_interval_times(wake_time, bed_time, frequency_hours)
