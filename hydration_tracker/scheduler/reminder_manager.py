"""Hydration reminder scheduling on top of the notification capability"""
import logging
import random
from typing import Optional

from hydration_tracker.models.profile import UserProfile
from hydration_tracker.models.reminder import ReminderStrategy, ReminderTime
from hydration_tracker.notifications.base import NotificationCapability, PermissionStatus
from hydration_tracker.scheduler.reminder_strategies import compute_reminder_times
from hydration_tracker.utils.reminder_messages import (
    GOAL_REACHED_BODY,
    GOAL_REACHED_TITLE,
    REMINDER_TITLE,
    random_reminder_message,
)

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """
    Install daily hydration reminders derived from the user's profile.

    Replacement is wholesale: every reschedule cancels all previously
    installed reminders before installing the new set.
    """

    def __init__(
        self,
        notifier: NotificationCapability,
        strategy: ReminderStrategy = ReminderStrategy.EVENLY_SPACED,
        rng: Optional[random.Random] = None,
    ):
        self.notifier = notifier
        self.strategy = strategy
        self.rng = rng
        self.active: list[ReminderTime] = []

    async def reschedule(self, profile: UserProfile, strategy: Optional[ReminderStrategy] = None) -> list[ReminderTime]:
        """
        Replace all scheduled reminders with the set derived from profile

        Args:
            profile: Current user profile (wake/bed time, frequency, flags)
            strategy: Override the scheduler's default strategy

        Returns:
            Reminder times installed (empty when disabled or not permitted)
        """
        if not profile.notifications_enabled:
            await self.disable()
            return []

        status = await self.notifier.get_permission_status()
        if status != PermissionStatus.GRANTED:
            logger.info("Notification permissions not granted, skipping scheduling")
            return []

        times = compute_reminder_times(
            profile.wake_time,
            profile.bed_time,
            frequency_hours=profile.reminder_frequency_hours,
            strategy=strategy or self.strategy,
        )

        await self.notifier.cancel_all()
        self.active = []

        for reminder_time in times:
            await self.notifier.schedule_daily(
                reminder_time.hour,
                reminder_time.minute,
                REMINDER_TITLE,
                random_reminder_message(self.rng),
                sound=profile.sound_enabled,
            )
            self.active.append(reminder_time)

        logger.info(
            f"Scheduled {len(times)} hydration reminders ({(strategy or self.strategy).value}): "
            f"{', '.join(str(t) for t in times) or 'none'}"
        )
        return list(self.active)

    async def disable(self) -> None:
        """Cancel every installed reminder"""
        await self.notifier.cancel_all()
        self.active = []
        logger.info("Hydration reminders disabled")

    async def request_permission_and_reschedule(self, profile: UserProfile) -> list[ReminderTime]:
        """
        Ask for notification permission and install reminders once granted.

        This is the only retry path after a denied permission.
        """
        status = await self.notifier.request_permission()
        if status != PermissionStatus.GRANTED:
            logger.info("Notification permission denied; reminders stay off")
            return []
        return await self.reschedule(profile)

    async def notify_goal_reached(self) -> None:
        """Send the one-off congratulation for reaching today's goal"""
        status = await self.notifier.get_permission_status()
        if status != PermissionStatus.GRANTED:
            logger.info("Notification permissions not granted")
            return
        await self.notifier.send_immediate(GOAL_REACHED_TITLE, GOAL_REACHED_BODY)
