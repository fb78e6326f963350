"""Notification capability consumed by the reminder scheduler"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from itertools import count

from hydration_tracker.models.reminder import ReminderTime, ScheduledReminder

logger = logging.getLogger(__name__)


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class NotificationCapability(ABC):
    """
    Local notification transport.

    schedule_daily() installs a recurring trigger at a fixed local
    hour/minute; the transport is responsible for firing it every day.
    """

    @abstractmethod
    async def get_permission_status(self) -> PermissionStatus:
        """Current permission without prompting"""

    @abstractmethod
    async def request_permission(self) -> PermissionStatus:
        """Prompt for permission if the transport supports it"""

    @abstractmethod
    async def schedule_daily(self, hour: int, minute: int, title: str, body: str, sound: bool = True) -> str:
        """Install a daily trigger and return its handle"""

    @abstractmethod
    async def cancel_all(self) -> None:
        """Remove every trigger installed through this capability"""

    @abstractmethod
    async def send_immediate(self, title: str, body: str) -> None:
        """Deliver a one-off notification now"""


class InMemoryNotifier(NotificationCapability):
    """Records schedules instead of delivering them (tests, headless runs)"""

    def __init__(self, permission: PermissionStatus = PermissionStatus.GRANTED, grant_on_request: bool = True):
        self.permission = permission
        self.grant_on_request = grant_on_request
        self.scheduled: dict[str, ScheduledReminder] = {}
        self.sent: list[tuple[str, str]] = []
        self.cancel_count = 0
        self._ids = count(1)

    async def get_permission_status(self) -> PermissionStatus:
        return self.permission

    async def request_permission(self) -> PermissionStatus:
        if self.permission != PermissionStatus.GRANTED and self.grant_on_request:
            self.permission = PermissionStatus.GRANTED
        return self.permission

    async def schedule_daily(self, hour: int, minute: int, title: str, body: str, sound: bool = True) -> str:
        handle = f"reminder-{next(self._ids)}"
        self.scheduled[handle] = ScheduledReminder(
            handle=handle,
            time=ReminderTime(hour=hour, minute=minute),
            title=title,
            body=body,
            sound=sound,
        )
        return handle

    async def cancel_all(self) -> None:
        self.cancel_count += 1
        self.scheduled.clear()

    async def send_immediate(self, title: str, body: str) -> None:
        self.sent.append((title, body))
        logger.info(f"Notification: {title} - {body}")

    @property
    def scheduled_times(self) -> list[ReminderTime]:
        return [reminder.time for reminder in self.scheduled.values()]
