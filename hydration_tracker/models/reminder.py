"""Reminder models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ReminderStrategy(str, Enum):
    """How reminder times are derived from wake and bed times"""
    EVENLY_SPACED = "evenly_spaced"  # max(3, span // 2) reminders, first 30 min after waking
    FIXED_INTERVAL = "fixed_interval"  # every N hours from waking until bedtime


class ReminderTime(BaseModel):
    """Daily firing time on a 24-hour clock"""
    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class ScheduledReminder(BaseModel):
    """A reminder handed to the notification capability"""
    handle: str
    time: ReminderTime
    title: str
    body: str
    sound: bool = True
