"""Unit tests for input validation"""
import pytest

from hydration_tracker.exceptions import ValidationError
from hydration_tracker.models.profile import Meridiem, WeightUnit
from hydration_tracker.validators import (
    IntakeAmountInput,
    format_validation_error,
    parse_intake_amount,
    parse_reminder_frequency,
    parse_time_of_day,
    parse_weight,
    safe_validate,
)


class TestWeightValidation:
    """Test weight entry"""

    def test_numeric_string(self):
        result = parse_weight(" 72 ", WeightUnit.LBS)
        assert result.weight == 72
        assert result.unit == WeightUnit.LBS

    @pytest.mark.parametrize("raw", ["abc", "", 0, -5, 701, True])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_weight(raw)
        assert exc_info.value.field == "weight"


class TestIntakeAmountValidation:
    def test_valid(self):
        assert parse_intake_amount(250) == 250

    @pytest.mark.parametrize("raw", [0, -1, 5001])
    def test_rejected(self, raw):
        with pytest.raises(ValidationError):
            parse_intake_amount(raw)


class TestTimeOfDayValidation:
    def test_valid(self):
        time = parse_time_of_day(10, 30, "PM")
        assert time.meridiem == Meridiem.PM
        assert time.to_24_hour() == (22, 30)

    @pytest.mark.parametrize("hour,minute,meridiem", [(7, 7, "AM"), (0, 0, "AM"), (13, 0, "PM"), (7, 0, "XM")])
    def test_rejected(self, hour, minute, meridiem):
        with pytest.raises(ValidationError):
            parse_time_of_day(hour, minute, meridiem)


class TestReminderFrequencyValidation:
    @pytest.mark.parametrize("hours", [1, 2, 3, 4])
    def test_offered_options(self, hours):
        assert parse_reminder_frequency(hours) == hours

    @pytest.mark.parametrize("hours", [0, 5, 24])
    def test_rejected(self, hours):
        with pytest.raises(ValidationError):
            parse_reminder_frequency(hours)


class TestHelpers:
    def test_safe_validate_error_message(self):
        instance, error = safe_validate(IntakeAmountInput, amount_ml=-1)
        assert instance is None
        assert error.startswith("❌ Invalid Amount Ml:")

    def test_safe_validate_success(self):
        instance, error = safe_validate(IntakeAmountInput, amount_ml=200)
        assert error is None
        assert instance.amount_ml == 200

    def test_format_non_pydantic_error(self):
        assert format_validation_error(RuntimeError("boom")) == "❌ Error: boom"
