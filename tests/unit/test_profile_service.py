"""Unit tests for ProfileStore"""
import json

import pytest

from hydration_tracker.models.profile import DisplayUnit, Gender, Meridiem, TimeOfDay, UserProfile, WeightUnit
from hydration_tracker.services.profile_service import ProfileStore, merge_profile
from hydration_tracker.storage.base import PROFILE_KEY


@pytest.fixture
def profile_store(memory_store):
    return ProfileStore(memory_store)


class TestMergeProfile:
    """Test the pure merge step"""

    def test_unrelated_field_keeps_goal(self):
        current = UserProfile()
        merged = merge_profile(current, {"display_unit": DisplayUnit.OZ}, Gender.FEMALE)
        assert merged.display_unit == DisplayUnit.OZ
        assert merged.daily_goal == current.daily_goal

    def test_gender_change_recomputes_goal(self):
        merged = merge_profile(UserProfile(), {"gender": Gender.MALE}, Gender.FEMALE)
        assert merged.daily_goal.milliliters == 2450

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            merge_profile(UserProfile(), {"height": 180}, Gender.FEMALE)

    def test_goal_cannot_be_set_directly(self):
        with pytest.raises(ValueError):
            merge_profile(UserProfile(), {"daily_goal": {"ml": 1, "liters": 0.0, "oz": 0.0}}, Gender.FEMALE)


class TestProfileStore:
    """Test profile loading, updates and persistence"""

    @pytest.mark.asyncio
    async def test_first_launch_defaults(self, profile_store):
        profile = await profile_store.load()
        assert profile.first_time is True
        assert profile.daily_goal.milliliters == 2400

    @pytest.mark.asyncio
    async def test_update_weight_in_pounds(self, profile_store):
        await profile_store.update_gender(Gender.MALE)
        profile = await profile_store.update_weight(150, WeightUnit.LBS)

        assert profile.weight_unit == WeightUnit.LBS
        assert profile.daily_goal.milliliters == 2381.4

    @pytest.mark.asyncio
    async def test_time_change_keeps_goal(self, profile_store):
        before = await profile_store.get()
        profile = await profile_store.update_wake_time(TimeOfDay(hour=6, minute=0, meridiem=Meridiem.AM))
        assert str(profile.wake_time) == "6:00 AM"
        assert profile.daily_goal == before.daily_goal

    @pytest.mark.asyncio
    async def test_invalid_value_leaves_profile(self, profile_store):
        """Test a rejected update changes nothing"""
        with pytest.raises(ValueError):
            await profile_store.update_reminder_frequency(0)
        assert (await profile_store.get()).reminder_frequency_hours == 2

    @pytest.mark.asyncio
    async def test_complete_onboarding_uses_rate_policy(self, profile_store):
        """Test unspecified gender falls back to the configured rate"""
        profile = await profile_store.complete_onboarding()
        assert profile.first_time is False
        assert profile.daily_goal.milliliters == 2170

    @pytest.mark.asyncio
    async def test_male_rate_policy(self, memory_store):
        store = ProfileStore(memory_store, unspecified_rate=Gender.MALE)
        profile = await store.recalculate_goal()
        assert profile.daily_goal.milliliters == 2450

    def test_unspecified_rate_policy_rejected(self, memory_store):
        with pytest.raises(ValueError):
            ProfileStore(memory_store, unspecified_rate=Gender.UNSPECIFIED)

    @pytest.mark.asyncio
    async def test_persists_whole_record(self, profile_store, memory_store):
        await profile_store.update_sound_enabled(False)

        stored = json.loads(await memory_store.get(PROFILE_KEY))
        assert stored["soundEnabled"] is False
        assert stored["wakeupTime"] == {"hour": 7, "minute": 30, "ampm": "AM"}
        assert stored["dailyWaterGoal"]["ml"] == 2400

    @pytest.mark.asyncio
    async def test_reload_from_store(self, profile_store, memory_store):
        await profile_store.update_display_unit(DisplayUnit.OZ)
        await profile_store.update_notifications_enabled(False)

        reloaded = await ProfileStore(memory_store).load()
        assert reloaded.display_unit == DisplayUnit.OZ
        assert reloaded.notifications_enabled is False

    @pytest.mark.asyncio
    async def test_malformed_profile_gives_defaults(self, memory_store):
        await memory_store.set(PROFILE_KEY, json.dumps({"weight": "heavy"}))
        profile = await ProfileStore(memory_store).load()
        assert profile == UserProfile()


class TestReminderReinstall:
    """Test schedule-related profile changes reinstall reminders"""

    @pytest.mark.asyncio
    async def test_onboarding_installs_reminders(self, container, notifier):
        await container.profile_store.update_bed_time(TimeOfDay(hour=10, minute=0, meridiem=Meridiem.PM))
        assert notifier.scheduled == {}

        await container.profile_store.complete_onboarding()
        assert len(notifier.scheduled_times) == 7

    @pytest.mark.asyncio
    async def test_bed_time_change_reschedules(self, container, notifier):
        profile_store = container.profile_store
        await profile_store.update_wake_time(TimeOfDay(hour=7, minute=0, meridiem=Meridiem.AM))
        await profile_store.complete_onboarding()

        await profile_store.update_bed_time(TimeOfDay(hour=10, minute=0, meridiem=Meridiem.PM))
        assert [str(t) for t in notifier.scheduled_times] == [
            "07:30", "09:39", "11:47", "13:56", "16:04", "18:13", "20:21",
        ]

    @pytest.mark.asyncio
    async def test_notifications_toggle(self, container, notifier):
        profile_store = container.profile_store
        await profile_store.complete_onboarding()

        await profile_store.update_notifications_enabled(False)
        assert notifier.scheduled == {}

        await profile_store.update_notifications_enabled(True)
        assert len(notifier.scheduled_times) == 8

    @pytest.mark.asyncio
    async def test_sound_change_forwarded(self, container, notifier):
        await container.profile_store.complete_onboarding()
        await container.profile_store.update_sound_enabled(False)
        assert all(not reminder.sound for reminder in notifier.scheduled.values())

    @pytest.mark.asyncio
    async def test_unrelated_change_leaves_reminders(self, container, notifier):
        await container.profile_store.complete_onboarding()
        cancels = notifier.cancel_count

        await container.profile_store.update_display_unit(DisplayUnit.OZ)
        assert notifier.cancel_count == cancels
