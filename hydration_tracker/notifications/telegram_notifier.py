"""Hydration reminders delivered through a Telegram bot's JobQueue"""
import logging
from datetime import time
from itertools import count

import telegram.error
from telegram.ext import Application, ContextTypes

from hydration_tracker.exceptions import wrap_external_exception
from hydration_tracker.notifications.base import NotificationCapability, PermissionStatus
from hydration_tracker.utils.datetime_helpers import get_zone

logger = logging.getLogger(__name__)

JOB_PREFIX = "hydration_reminder_"


class TelegramNotifier(NotificationCapability):
    """
    Telegram transport for the notification capability.

    Permission model: a configured chat id means the user has opted in.
    Daily triggers are JobQueue.run_daily jobs in the user's timezone.
    """

    def __init__(self, application: Application, chat_id: str, user_timezone: str = "UTC"):
        if application.job_queue is None:
            raise RuntimeError(
                "Application.job_queue is None. Install python-telegram-bot[job-queue] "
                "or build the application with .job_queue() enabled."
            )
        self.application = application
        self.job_queue = application.job_queue
        self.chat_id = chat_id
        self.zone = get_zone(user_timezone)
        self._ids = count(1)

    async def get_permission_status(self) -> PermissionStatus:
        return PermissionStatus.GRANTED if self.chat_id else PermissionStatus.DENIED

    async def request_permission(self) -> PermissionStatus:
        # Telegram has no runtime prompt; the user opts in by configuring a chat
        status = await self.get_permission_status()
        if status != PermissionStatus.GRANTED:
            logger.warning("No TELEGRAM_CHAT_ID configured - hydration reminders disabled")
        return status

    async def schedule_daily(self, hour: int, minute: int, title: str, body: str, sound: bool = True) -> str:
        name = f"{JOB_PREFIX}{hour:02d}{minute:02d}_{next(self._ids)}"
        self.job_queue.run_daily(
            callback=self._send_reminder,
            time=time(hour=hour, minute=minute, tzinfo=self.zone),
            data={
                "title": title,
                "body": body,
                "sound": sound,
            },
            name=name,
            chat_id=self.chat_id,
        )
        logger.info(f"Scheduled daily hydration reminder {name} at {hour:02d}:{minute:02d} {self.zone.key}")
        return name

    async def cancel_all(self) -> None:
        cancelled = 0
        for job in self.job_queue.jobs():
            if job.name and job.name.startswith(JOB_PREFIX):
                job.schedule_removal()
                cancelled += 1
        logger.info(f"Cancelled {cancelled} hydration reminders")

    async def send_immediate(self, title: str, body: str) -> None:
        if not self.chat_id:
            logger.info("Notification permission not granted")
            return
        try:
            await self.application.bot.send_message(chat_id=self.chat_id, text=f"{title}\n\n{body}")
        except telegram.error.TelegramError as e:
            raise wrap_external_exception(e, operation="send_immediate")

    async def _send_reminder(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        """JobQueue callback for a daily reminder"""
        data = context.job.data

        try:
            await context.bot.send_message(
                chat_id=context.job.chat_id,
                text=f"{data['title']}\n\n{data['body']}",
                disable_notification=not data.get("sound", True),
            )
            logger.info(f"Sent hydration reminder {context.job.name}")
        except telegram.error.TelegramError as e:
            logger.error(f"Failed to send hydration reminder: {e}", exc_info=True)
