"""User profile models"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"


class WeightUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"


class DisplayUnit(str, Enum):
    ML = "ml"
    OZ = "oz"


class Meridiem(str, Enum):
    AM = "AM"
    PM = "PM"


class TimeOfDay(BaseModel):
    """Wall-clock time on a 12-hour dial, no date and no timezone"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hour: int = Field(ge=1, le=12)
    minute: int = Field(ge=0, le=59)
    meridiem: Meridiem = Field(alias="ampm")

    def to_24_hour(self) -> tuple[int, int]:
        """Return (hour, minute) on a 24-hour clock"""
        hour24 = self.hour
        if self.meridiem == Meridiem.PM and self.hour != 12:
            hour24 = self.hour + 12
        elif self.meridiem == Meridiem.AM and self.hour == 12:
            hour24 = 0
        return hour24, self.minute

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute:02d} {self.meridiem.value}"


class WaterGoal(BaseModel):
    """Daily water target in three units, recomputed wholesale"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    milliliters: float = Field(alias="ml")
    liters: float
    ounces: float = Field(alias="oz")


class UserProfile(BaseModel):
    """
    Hydration profile and preferences.

    Field aliases match the JSON snapshot written under the profile key,
    so profiles saved by earlier app versions load unchanged.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    first_time: bool = Field(default=True, alias="isFirstTime")
    gender: Gender = Gender.UNSPECIFIED
    weight: float = Field(default=70, gt=0)
    weight_unit: WeightUnit = Field(default=WeightUnit.KG, alias="weightUnit")
    wake_time: TimeOfDay = Field(
        default_factory=lambda: TimeOfDay(hour=7, minute=30, meridiem=Meridiem.AM),
        alias="wakeupTime",
    )
    bed_time: TimeOfDay = Field(
        default_factory=lambda: TimeOfDay(hour=11, minute=30, meridiem=Meridiem.PM),
        alias="bedTime",
    )
    display_unit: DisplayUnit = Field(default=DisplayUnit.ML, alias="unit")
    reminder_frequency_hours: int = Field(default=2, ge=1, alias="reminderFrequency")
    sound_enabled: bool = Field(default=True, alias="soundEnabled")
    notifications_enabled: bool = Field(default=True, alias="notificationsEnabled")
    daily_goal: WaterGoal = Field(
        default_factory=lambda: WaterGoal(milliliters=2400, liters=2.4, ounces=81.15),
        alias="dailyWaterGoal",
    )

    @field_validator("gender", mode="before")
    @classmethod
    def null_gender_is_unspecified(cls, v):
        """Older snapshots store an unset gender as null"""
        if v is None:
            return Gender.UNSPECIFIED
        return v

    def to_storage(self) -> dict:
        """Serialize to the persisted JSON shape"""
        return self.model_dump(mode="json", by_alias=True)
