"""
ProfileStore - User Profile Business Logic

Holds the single user's profile and preferences and persists the whole
record after every change. The daily goal is only ever replaced by a
recalculation from (weight, weight unit, gender).
"""

import logging
from typing import Any

from hydration_tracker.exceptions import NotificationError
from hydration_tracker.models.profile import (
    DisplayUnit,
    Gender,
    TimeOfDay,
    UserProfile,
    WeightUnit,
)
from hydration_tracker.storage.base import PROFILE_KEY, KeyValueStore
from hydration_tracker.storage.writer import SnapshotWriter
from hydration_tracker.utils.goal_calculator import compute_goal

logger = logging.getLogger(__name__)

GOAL_INPUT_FIELDS = {"weight", "weight_unit", "gender"}
REMINDER_INPUT_FIELDS = {"wake_time", "bed_time", "reminder_frequency_hours", "notifications_enabled", "sound_enabled"}


def merge_profile(current: UserProfile, partial: dict[str, Any], unspecified_rate: Gender) -> UserProfile:
    """
    Shallow-merge partial into current and validate the result

    Args:
        current: Existing profile
        partial: Field name -> new value
        unspecified_rate: Rate policy used when the goal is recalculated

    Raises:
        ValueError: Unknown field, direct goal edit, or invalid value
            (pydantic.ValidationError is a ValueError)
    """
    unknown = set(partial) - set(UserProfile.model_fields)
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    if "daily_goal" in partial:
        raise ValueError("daily_goal is derived; change weight or gender, or call recalculate_goal()")

    merged = UserProfile.model_validate({**current.model_dump(), **partial})

    if GOAL_INPUT_FIELDS & set(partial):
        merged = with_recalculated_goal(merged, unspecified_rate)
    return merged


def with_recalculated_goal(profile: UserProfile, unspecified_rate: Gender) -> UserProfile:
    goal = compute_goal(profile.weight, profile.weight_unit, profile.gender, unspecified_rate=unspecified_rate)
    return profile.model_copy(update={"daily_goal": goal})


class ProfileStore:
    """
    Service for the user profile record.

    Responsibilities:
    - Load the profile (defaults on first launch or malformed data)
    - Field updates through one serialized writer
    - Goal recalculation and onboarding completion
    - Reminder reinstall when schedule-related fields change
    """

    def __init__(self, store: KeyValueStore, unspecified_rate: Gender = Gender.FEMALE, reminder_scheduler=None):
        """
        Initialize ProfileStore.

        Args:
            store: Key-value persistence capability
            unspecified_rate: Rate (MALE or FEMALE) applied when gender is unspecified
            reminder_scheduler: Optional ReminderScheduler reinstalled after schedule changes
        """
        if unspecified_rate == Gender.UNSPECIFIED:
            raise ValueError("unspecified_rate must be Gender.MALE or Gender.FEMALE")
        self.unspecified_rate = unspecified_rate
        self.reminder_scheduler = reminder_scheduler
        self.writer: SnapshotWriter[UserProfile] = SnapshotWriter(
            store,
            PROFILE_KEY,
            encode=lambda profile: profile.to_storage(),
            decode=UserProfile.model_validate,
            default_factory=UserProfile,
        )

    async def load(self) -> UserProfile:
        """Load the stored profile, or the default profile if none is stored or it is malformed"""
        profile = await self.writer.load()
        logger.info(f"Loaded profile (first_time={profile.first_time})")
        return profile

    async def get(self) -> UserProfile:
        """Current profile, loading it on first access"""
        if not self.writer.loaded:
            return await self.load()
        return self.writer.snapshot

    async def update(self, **partial: Any) -> UserProfile:
        """
        Merge fields into the profile and persist the whole record

        Returns:
            The merged profile snapshot

        Raises:
            ValueError: Invalid field or value; nothing is changed
            StorageError: The write failed; the change is kept in memory
        """
        def apply(current: UserProfile) -> tuple[UserProfile, UserProfile]:
            merged = merge_profile(current, partial, self.unspecified_rate)
            return merged, merged

        profile = await self.writer.mutate(apply)
        logger.info(f"Updated profile fields: {', '.join(sorted(partial))}")
        if REMINDER_INPUT_FIELDS & set(partial) and not profile.first_time:
            await self._reschedule(profile)
        return profile

    async def update_gender(self, gender: Gender) -> UserProfile:
        return await self.update(gender=gender)

    async def update_weight(self, weight: float, weight_unit: WeightUnit) -> UserProfile:
        return await self.update(weight=weight, weight_unit=weight_unit)

    async def update_wake_time(self, wake_time: TimeOfDay) -> UserProfile:
        return await self.update(wake_time=wake_time)

    async def update_bed_time(self, bed_time: TimeOfDay) -> UserProfile:
        return await self.update(bed_time=bed_time)

    async def update_display_unit(self, display_unit: DisplayUnit) -> UserProfile:
        return await self.update(display_unit=display_unit)

    async def update_reminder_frequency(self, hours: int) -> UserProfile:
        return await self.update(reminder_frequency_hours=hours)

    async def update_sound_enabled(self, enabled: bool) -> UserProfile:
        return await self.update(sound_enabled=enabled)

    async def update_notifications_enabled(self, enabled: bool) -> UserProfile:
        return await self.update(notifications_enabled=enabled)

    async def recalculate_goal(self) -> UserProfile:
        """Explicitly re-derive the daily goal from the current profile"""
        def apply(current: UserProfile) -> tuple[UserProfile, UserProfile]:
            updated = with_recalculated_goal(current, self.unspecified_rate)
            return updated, updated

        profile = await self.writer.mutate(apply)
        logger.info(f"Daily goal recalculated: {profile.daily_goal.milliliters} ml")
        return profile

    async def complete_onboarding(self) -> UserProfile:
        """Compute the goal from onboarding answers and clear the first-time flag"""
        def apply(current: UserProfile) -> tuple[UserProfile, UserProfile]:
            updated = with_recalculated_goal(current, self.unspecified_rate)
            updated = updated.model_copy(update={"first_time": False})
            return updated, updated

        profile = await self.writer.mutate(apply)
        logger.info(f"Onboarding complete, daily goal {profile.daily_goal.milliliters} ml")
        await self._reschedule(profile)
        return profile

    async def _reschedule(self, profile: UserProfile) -> None:
        if self.reminder_scheduler is None:
            return
        try:
            await self.reminder_scheduler.reschedule(profile)
        except NotificationError as e:
            logger.warning(f"Reminders not reinstalled: {e.message}")
