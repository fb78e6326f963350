"""Unit tests for profile, intake and reminder models"""
import pytest
from pydantic import ValidationError

from hydration_tracker.models.intake import (
    WATER_CONTAINERS,
    ContainerType,
    DailyRecord,
    IntakeEvent,
    Ledger,
)
from hydration_tracker.models.profile import (
    DisplayUnit,
    Gender,
    Meridiem,
    TimeOfDay,
    UserProfile,
    WaterGoal,
    WeightUnit,
)
from hydration_tracker.models.reminder import ReminderTime


class TestTimeOfDay:
    """Test 12-hour time model"""

    @pytest.mark.parametrize("hour,meridiem,expected", [
        (12, Meridiem.AM, 0),
        (1, Meridiem.AM, 1),
        (11, Meridiem.AM, 11),
        (12, Meridiem.PM, 12),
        (1, Meridiem.PM, 13),
        (11, Meridiem.PM, 23),
    ])
    def test_to_24_hour(self, hour, meridiem, expected):
        assert TimeOfDay(hour=hour, minute=15, meridiem=meridiem).to_24_hour() == (expected, 15)

    def test_any_minute_accepted(self):
        """Test the model accepts minutes outside 5-minute steps"""
        assert TimeOfDay(hour=7, minute=7, meridiem=Meridiem.AM).minute == 7

    def test_hour_out_of_range(self):
        with pytest.raises(ValidationError):
            TimeOfDay(hour=13, minute=0, meridiem=Meridiem.PM)

    def test_stored_shape_uses_ampm(self):
        time = TimeOfDay.model_validate({"hour": 7, "minute": 30, "ampm": "AM"})
        assert time.meridiem == Meridiem.AM
        assert time.model_dump(by_alias=True, mode="json") == {"hour": 7, "minute": 30, "ampm": "AM"}

    def test_str(self):
        assert str(TimeOfDay(hour=7, minute=5, meridiem=Meridiem.PM)) == "7:05 PM"


class TestUserProfile:
    """Test profile defaults and persisted shape"""

    def test_defaults(self):
        profile = UserProfile()
        assert profile.first_time is True
        assert profile.gender == Gender.UNSPECIFIED
        assert profile.weight == 70
        assert profile.weight_unit == WeightUnit.KG
        assert str(profile.wake_time) == "7:30 AM"
        assert str(profile.bed_time) == "11:30 PM"
        assert profile.display_unit == DisplayUnit.ML
        assert profile.reminder_frequency_hours == 2
        assert profile.daily_goal.milliliters == 2400

    def test_weight_must_be_positive(self):
        with pytest.raises(ValidationError):
            UserProfile(weight=0)

    def test_storage_keys(self):
        data = UserProfile().to_storage()
        assert set(data) == {
            "isFirstTime", "gender", "weight", "weightUnit", "wakeupTime", "bedTime",
            "unit", "reminderFrequency", "soundEnabled", "notificationsEnabled", "dailyWaterGoal",
        }
        assert data["dailyWaterGoal"] == {"ml": 2400, "liters": 2.4, "oz": 81.15}

    def test_null_gender_reads_as_unspecified(self):
        profile = UserProfile.model_validate({"gender": None, "weight": 80})
        assert profile.gender == Gender.UNSPECIFIED

    def test_round_trip(self):
        profile = UserProfile(gender=Gender.MALE, weight=82, display_unit=DisplayUnit.OZ)
        assert UserProfile.model_validate(profile.to_storage()) == profile

    def test_goal_is_frozen(self):
        goal = WaterGoal(milliliters=2450, liters=2.5, ounces=82.8)
        with pytest.raises(ValidationError):
            goal.liters = 2.45


class TestIntakeModels:
    """Test intake events and daily records"""

    def _event(self, event_id="1", amount=250):
        return IntakeEvent(
            id=event_id,
            amount_ml=amount,
            timestamp_ms=1736931600000,
            calendar_date="2025-01-15",
            container_type=ContainerType.GLASS,
        )

    def test_event_amount_positive(self):
        with pytest.raises(ValidationError):
            self._event(amount=0)

    def test_event_stored_shape(self):
        data = self._event().model_dump(by_alias=True, mode="json")
        assert data == {
            "id": "1",
            "amount": 250,
            "timestamp": 1736931600000,
            "date": "2025-01-15",
            "containerType": "glass",
        }

    def test_record_total_follows_events(self):
        """Test a stored total that disagrees with events is corrected"""
        record = DailyRecord.model_validate({
            "date": "2025-01-15",
            "totalIntake": 999,
            "records": [self._event("1").model_dump(by_alias=True), self._event("2").model_dump(by_alias=True)],
        })
        assert record.total_intake_ml == 500

    def test_ledger_rejects_duplicate_dates(self):
        record = DailyRecord(calendar_date="2025-01-15", events=[self._event()])
        with pytest.raises(ValidationError):
            Ledger(records=[record, record])

    def test_ledger_lookup(self):
        ledger = Ledger(records=[DailyRecord(calendar_date="2025-01-15", events=[self._event()])])
        assert ledger.get("2025-01-15").total_intake_ml == 250
        assert ledger.get("2025-01-16") is None
        assert ledger.intake_for("2025-01-16") == 0

    def test_ledger_from_storage_requires_list(self):
        with pytest.raises(ValueError):
            Ledger.from_storage({"date": "2025-01-15"})

    def test_container_presets(self):
        assert WATER_CONTAINERS[ContainerType.CUP].amount_ml == 200
        assert WATER_CONTAINERS[ContainerType.GLASS].amount_ml == 250
        assert WATER_CONTAINERS[ContainerType.BOTTLE].amount_ml == 500
        assert WATER_CONTAINERS[ContainerType.JUG].amount_ml == 1000
        assert ContainerType.CUSTOM not in WATER_CONTAINERS


class TestReminderTime:
    def test_bounds(self):
        with pytest.raises(ValidationError):
            ReminderTime(hour=24, minute=0)

    def test_str(self):
        assert str(ReminderTime(hour=9, minute=5)) == "09:05"
