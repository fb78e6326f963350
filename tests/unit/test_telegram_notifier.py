"""Unit tests for the Telegram notification transport"""
from datetime import time
from unittest.mock import AsyncMock, MagicMock

import pytest
import telegram.error

from hydration_tracker.exceptions import NotificationTransportError
from hydration_tracker.notifications.base import PermissionStatus
from hydration_tracker.notifications.telegram_notifier import JOB_PREFIX, TelegramNotifier


def _job(name):
    job = MagicMock()
    job.name = name
    return job


@pytest.fixture
def application():
    app = MagicMock()
    app.bot.send_message = AsyncMock()
    app.job_queue.jobs.return_value = []
    return app


class TestTelegramNotifier:
    """Test JobQueue scheduling and message delivery"""

    def test_requires_job_queue(self, application):
        application.job_queue = None
        with pytest.raises(RuntimeError):
            TelegramNotifier(application, "42")

    @pytest.mark.asyncio
    async def test_permission_follows_chat_id(self, application):
        assert await TelegramNotifier(application, "42").get_permission_status() == PermissionStatus.GRANTED
        assert await TelegramNotifier(application, "").request_permission() == PermissionStatus.DENIED

    @pytest.mark.asyncio
    async def test_schedule_daily(self, application):
        notifier = TelegramNotifier(application, "42", "Europe/Stockholm")
        handle = await notifier.schedule_daily(9, 39, "💧 Hydration Time!", "Drink up", sound=False)

        assert handle.startswith(f"{JOB_PREFIX}0939_")
        kwargs = application.job_queue.run_daily.call_args.kwargs
        assert kwargs["time"] == time(9, 39, tzinfo=notifier.zone)
        assert kwargs["name"] == handle
        assert kwargs["chat_id"] == "42"
        assert kwargs["data"] == {"title": "💧 Hydration Time!", "body": "Drink up", "sound": False}

    @pytest.mark.asyncio
    async def test_cancel_all_only_reminders(self, application):
        """Test unrelated jobs on the same queue are left alone"""
        reminder, other = _job(f"{JOB_PREFIX}0730_1"), _job("daily_report")
        application.job_queue.jobs.return_value = [reminder, other]

        await TelegramNotifier(application, "42").cancel_all()

        reminder.schedule_removal.assert_called_once()
        other.schedule_removal.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_immediate(self, application):
        await TelegramNotifier(application, "42").send_immediate("Goal Reached! 🎉", "Well done")
        application.bot.send_message.assert_awaited_once_with(chat_id="42", text="Goal Reached! 🎉\n\nWell done")

    @pytest.mark.asyncio
    async def test_send_immediate_without_chat(self, application):
        await TelegramNotifier(application, "").send_immediate("t", "b")
        application.bot.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_immediate_error_wrapped(self, application):
        application.bot.send_message.side_effect = telegram.error.NetworkError("down")
        with pytest.raises(NotificationTransportError):
            await TelegramNotifier(application, "42").send_immediate("t", "b")

    @pytest.mark.asyncio
    async def test_reminder_callback_respects_sound(self, application):
        context = MagicMock()
        context.bot.send_message = AsyncMock()
        context.job.chat_id = "42"
        context.job.data = {"title": "💧 Hydration Time!", "body": "Drink up", "sound": False}

        await TelegramNotifier(application, "42")._send_reminder(context)

        context.bot.send_message.assert_awaited_once_with(
            chat_id="42",
            text="💧 Hydration Time!\n\nDrink up",
            disable_notification=True,
        )

    @pytest.mark.asyncio
    async def test_reminder_callback_swallows_transport_error(self, application):
        """Test a failed daily send does not kill the job"""
        context = MagicMock()
        context.bot.send_message = AsyncMock(side_effect=telegram.error.NetworkError("down"))
        context.job.data = {"title": "t", "body": "b"}

        await TelegramNotifier(application, "42")._send_reminder(context)
