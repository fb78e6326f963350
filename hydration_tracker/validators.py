"""
Centralized Pydantic Input Validation Layer

Validates raw user input at the caller boundary, before anything reaches the
profile store or the intake ledger.

Validation Categories:
1. Weight - numeric, positive, realistic range
2. Intake Amount - positive, at most one 5 L entry
3. Time of Day - 12-hour dial in 5-minute steps
4. Reminder Frequency - the 1-4 hour options offered in settings
"""

import logging
from typing import Any, ClassVar, Optional
from pydantic import BaseModel, Field, field_validator

from hydration_tracker.exceptions import ValidationError as InputValidationError
from hydration_tracker.models.profile import Meridiem, TimeOfDay, WeightUnit

logger = logging.getLogger(__name__)


# ============================================================================
# WEIGHT VALIDATION
# ============================================================================

class WeightInput(BaseModel):
    """
    Validate weight entered in onboarding or settings

    Constraints:
    - Must parse as a number (text input is accepted, e.g. "72")
    - Must be positive
    - At most 700 (kg or lbs)
    """
    weight: float = Field(..., gt=0, le=700, description="Body weight")
    unit: WeightUnit = WeightUnit.KG

    @field_validator('weight', mode='before')
    @classmethod
    def parse_numeric(cls, v: Any) -> Any:
        """Accept numeric strings, reject anything else"""
        if isinstance(v, bool):
            raise ValueError("Please enter a valid weight value")
        if isinstance(v, str):
            try:
                return float(v.strip())
            except ValueError:
                raise ValueError("Please enter a valid weight value")
        return v


# ============================================================================
# INTAKE AMOUNT VALIDATION
# ============================================================================

class IntakeAmountInput(BaseModel):
    """
    Validate a single water intake amount

    Constraints:
    - Greater than 0 ml
    - At most 5000 ml per entry
    """
    amount_ml: float = Field(..., gt=0, le=5000, description="Amount in ml")

    @field_validator('amount_ml')
    @classmethod
    def large_amount_warning(cls, v: float) -> float:
        """Log warning for unusually large single entries"""
        if v > 2000:
            logger.warning(f"Very large intake entry: {v} ml. Please verify this is correct.")
        return v


# ============================================================================
# TIME OF DAY VALIDATION
# ============================================================================

class TimeOfDayInput(BaseModel):
    """
    Validate wake-up and bed times from the onboarding pickers

    Constraints:
    - Hour 1-12
    - Minute 0-55 in 5-minute increments
    - AM or PM
    """
    hour: int = Field(..., ge=1, le=12)
    minute: int = Field(..., ge=0, le=59)
    meridiem: Meridiem

    MINUTE_STEP: ClassVar[int] = 5

    @field_validator('minute')
    @classmethod
    def five_minute_steps(cls, v: int) -> int:
        if v % cls.MINUTE_STEP != 0:
            raise ValueError(f"Minute must be a multiple of {cls.MINUTE_STEP}, got {v}")
        return v

    def to_time_of_day(self) -> TimeOfDay:
        return TimeOfDay(hour=self.hour, minute=self.minute, meridiem=self.meridiem)


# ============================================================================
# REMINDER FREQUENCY VALIDATION
# ============================================================================

class ReminderFrequencyInput(BaseModel):
    """
    Validate reminder frequency chosen in settings

    Constraint:
    - Whole hours, one of the offered options (1-4)
    """
    hours: int = Field(..., description="Hours between reminders")

    OPTIONS: ClassVar[tuple[int, ...]] = (1, 2, 3, 4)

    @field_validator('hours')
    @classmethod
    def offered_option(cls, v: int) -> int:
        if v not in cls.OPTIONS:
            raise ValueError(f"Reminder frequency must be one of {', '.join(map(str, cls.OPTIONS))} hours")
        return v


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def format_validation_error(e: Exception) -> str:
    """
    Format Pydantic validation error for user-friendly display

    Args:
        e: ValidationError from Pydantic

    Returns:
        User-friendly error message with emoji
    """
    from pydantic import ValidationError

    if not isinstance(e, ValidationError):
        return f"❌ Error: {str(e)}"

    errors = e.errors()
    if not errors:
        return "❌ Validation failed"

    # Get first error for simplicity
    first_error = errors[0]
    loc = first_error.get('loc') or ('input',)
    field = loc[0]
    msg = first_error.get('msg', 'Invalid value')

    if isinstance(field, str):
        field_name = field.replace('_', ' ').title()
    else:
        field_name = 'Input'

    return f"❌ Invalid {field_name}: {msg}"


def safe_validate(model_class: type[BaseModel], **data) -> tuple[Optional[BaseModel], Optional[str]]:
    """
    Safely validate data and return (validated_model, error_message)

    Args:
        model_class: Pydantic model class
        **data: Data to validate

    Returns:
        Tuple of (validated_instance, error_message)
        - If valid: (instance, None)
        - If invalid: (None, user_friendly_error)
    """
    from pydantic import ValidationError

    try:
        instance = model_class(**data)
        return instance, None
    except ValidationError as e:
        error_msg = format_validation_error(e)
        logger.warning(f"Validation failed for {model_class.__name__}: {error_msg}")
        return None, error_msg


def require_valid(model_class: type[BaseModel], field: str, **data) -> BaseModel:
    """
    Validate data or raise the app's ValidationError

    Raises:
        hydration_tracker.exceptions.ValidationError: Input rejected
    """
    instance, error = safe_validate(model_class, **data)
    if instance is None:
        raise InputValidationError(message=error, field=field, value=data.get(field))
    return instance


def parse_weight(raw: Any, unit: WeightUnit = WeightUnit.KG) -> WeightInput:
    return require_valid(WeightInput, "weight", weight=raw, unit=unit)


def parse_intake_amount(raw: Any) -> float:
    return require_valid(IntakeAmountInput, "amount_ml", amount_ml=raw).amount_ml


def parse_time_of_day(hour: Any, minute: Any, meridiem: Any) -> TimeOfDay:
    return require_valid(TimeOfDayInput, "time", hour=hour, minute=minute, meridiem=meridiem).to_time_of_day()


def parse_reminder_frequency(raw: Any) -> int:
    return require_valid(ReminderFrequencyInput, "hours", hours=raw).hours
