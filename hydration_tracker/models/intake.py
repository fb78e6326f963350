"""Water intake ledger models"""
import logging
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)


class ContainerType(str, Enum):
    CUP = "cup"
    GLASS = "glass"
    BOTTLE = "bottle"
    JUG = "jug"
    CUSTOM = "custom"


class WaterContainer(BaseModel):
    """Quick-add container preset"""
    type: ContainerType
    label: str
    amount_ml: int


WATER_CONTAINERS: dict[ContainerType, WaterContainer] = {
    ContainerType.CUP: WaterContainer(type=ContainerType.CUP, label="Cup", amount_ml=200),
    ContainerType.GLASS: WaterContainer(type=ContainerType.GLASS, label="Glass", amount_ml=250),
    ContainerType.BOTTLE: WaterContainer(type=ContainerType.BOTTLE, label="Bottle", amount_ml=500),
    ContainerType.JUG: WaterContainer(type=ContainerType.JUG, label="Jug (1L)", amount_ml=1000),
}


class IntakeEvent(BaseModel):
    """Single logged drink, immutable once created"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    amount_ml: float = Field(gt=0, alias="amount")
    timestamp_ms: int = Field(alias="timestamp")
    calendar_date: str = Field(alias="date")  # YYYY-MM-DD, local time
    container_type: ContainerType = Field(default=ContainerType.CUSTOM, alias="containerType")


class DailyRecord(BaseModel):
    """One calendar day's aggregated intake"""
    model_config = ConfigDict(populate_by_name=True)

    calendar_date: str = Field(alias="date")
    total_intake_ml: float = Field(default=0, alias="totalIntake")
    events: list[IntakeEvent] = Field(default_factory=list, alias="records")
    goal_reached: bool = Field(default=False, alias="goalReachedNotified")

    @model_validator(mode="after")
    def total_matches_events(self) -> "DailyRecord":
        """Keep total_intake_ml equal to the sum of event amounts"""
        expected = sum(event.amount_ml for event in self.events)
        if self.total_intake_ml != expected:
            logger.warning(
                f"Daily record {self.calendar_date} total {self.total_intake_ml} "
                f"disagrees with events ({expected}); using event sum"
            )
            self.total_intake_ml = expected
        return self


class Ledger(BaseModel):
    """Date-keyed, insertion-ordered collection of daily records"""
    records: list[DailyRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_dates(self) -> "Ledger":
        seen = set()
        for record in self.records:
            if record.calendar_date in seen:
                raise ValueError(f"Duplicate daily record for {record.calendar_date}")
            seen.add(record.calendar_date)
        return self

    def get(self, calendar_date: str) -> Optional[DailyRecord]:
        for record in self.records:
            if record.calendar_date == calendar_date:
                return record
        return None

    def intake_for(self, calendar_date: str) -> float:
        record = self.get(calendar_date)
        return record.total_intake_ml if record else 0

    def __len__(self) -> int:
        return len(self.records)

    def to_storage(self) -> list[dict]:
        """Serialize to the persisted JSON array"""
        return [record.model_dump(mode="json", by_alias=True) for record in self.records]

    @classmethod
    def from_storage(cls, payload) -> "Ledger":
        if not isinstance(payload, list):
            raise ValueError(f"Ledger payload must be a list, got {type(payload).__name__}")
        return cls(records=[DailyRecord.model_validate(item) for item in payload])
