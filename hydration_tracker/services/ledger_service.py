"""
IntakeLedger - Water Intake Business Logic

Appends intake events to per-day records and persists the whole ledger
after every change. Records are append-only: logging the same amount twice
produces two events.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from hydration_tracker.exceptions import NotificationError, StorageError
from hydration_tracker.models.intake import (
    WATER_CONTAINERS,
    ContainerType,
    DailyRecord,
    IntakeEvent,
    Ledger,
)
from hydration_tracker.storage.base import LEDGER_KEY, KeyValueStore
from hydration_tracker.storage.writer import SnapshotWriter
from hydration_tracker.utils.datetime_helpers import ClockFn, LocalDateFn, system_clock_ms
from hydration_tracker.utils.formatters import progress_percent
from hydration_tracker.validators import parse_intake_amount

logger = logging.getLogger(__name__)


def _event_id(now_ms: int, record: Optional[DailyRecord]) -> str:
    """Time-derived id, suffixed when two events share a millisecond"""
    base = str(now_ms)
    if record is None:
        return base
    taken = {event.id for event in record.events}
    candidate, n = base, 1
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def record_intake(
    ledger: Ledger,
    amount_ml: float,
    container_type: ContainerType,
    now_ms: int,
    daily_goal_ml: float,
    date_fn: LocalDateFn,
) -> tuple[Ledger, IntakeEvent, DailyRecord]:
    """
    Append one intake event to the ledger

    Args:
        ledger: Current ledger (not modified)
        amount_ml: Amount drunk, > 0
        container_type: Container preset or CUSTOM
        now_ms: Event time, epoch millis
        daily_goal_ml: Goal used for the goal-reached flag
        date_fn: Epoch millis -> local "YYYY-MM-DD"

    Returns:
        (updated ledger, new event, updated daily record)

    Raises:
        ValueError: amount_ml is not positive
    """
    if amount_ml <= 0:
        raise ValueError(f"Intake amount must be positive, got {amount_ml}")

    calendar_date = date_fn(now_ms)
    existing = ledger.get(calendar_date)

    event = IntakeEvent(
        id=_event_id(now_ms, existing),
        amount_ml=amount_ml,
        timestamp_ms=now_ms,
        calendar_date=calendar_date,
        container_type=container_type,
    )

    events = [*existing.events, event] if existing else [event]
    total = sum(e.amount_ml for e in events)
    # Sticky: once reached the flag is never cleared for that day
    goal_reached = (existing is not None and existing.goal_reached) or total >= daily_goal_ml

    record = DailyRecord(
        calendar_date=calendar_date,
        total_intake_ml=total,
        events=events,
        goal_reached=goal_reached,
    )

    if existing:
        records = [record if r.calendar_date == calendar_date else r for r in ledger.records]
    else:
        records = [*ledger.records, record]

    return Ledger(records=records), event, record


@dataclass
class IntakeResult:
    """Outcome of logging one drink"""
    event: IntakeEvent
    record: DailyRecord
    goal_just_reached: bool


class IntakeLedger:
    """
    Service for the water intake ledger.

    Responsibilities:
    - Load the ledger (empty when missing or malformed)
    - Record intake through one serialized writer
    - Today's totals and progress
    - Goal-reached notification, once per day
    """

    def __init__(
        self,
        store: KeyValueStore,
        profile_store,
        date_fn: LocalDateFn,
        clock: ClockFn = system_clock_ms,
        reminder_scheduler=None,
    ):
        """
        Initialize IntakeLedger.

        Args:
            store: Key-value persistence capability
            profile_store: ProfileStore supplying the daily goal
            date_fn: Epoch millis -> local calendar date
            clock: Current epoch millis
            reminder_scheduler: Optional ReminderScheduler for goal notifications
        """
        self.profile_store = profile_store
        self.date_fn = date_fn
        self.clock = clock
        self.reminder_scheduler = reminder_scheduler
        self.writer: SnapshotWriter[Ledger] = SnapshotWriter(
            store,
            LEDGER_KEY,
            encode=lambda ledger: ledger.to_storage(),
            decode=Ledger.from_storage,
            default_factory=Ledger,
        )

    async def load_ledger(self) -> Ledger:
        """Reload the ledger from storage"""
        ledger = await self.writer.load()
        logger.info(f"Loaded intake ledger with {len(ledger)} daily records")
        return ledger

    async def get_ledger(self) -> Ledger:
        """Current ledger snapshot, loading it on first access"""
        if not self.writer.loaded:
            return await self.load_ledger()
        return self.writer.snapshot

    async def record_intake(
        self,
        amount_ml: Union[float, str],
        container_type: ContainerType = ContainerType.CUSTOM,
        now_ms: Optional[int] = None,
    ) -> IntakeResult:
        """
        Log a drink and persist the ledger

        Args:
            amount_ml: Amount in ml (validated at this boundary)
            container_type: Container preset or CUSTOM
            now_ms: Event time; defaults to the clock

        Returns:
            IntakeResult with the new event and updated daily record

        Raises:
            ValidationError: Amount rejected; nothing is changed
            StorageError: The write failed; the event is kept in memory
        """
        amount = parse_intake_amount(amount_ml)
        timestamp = now_ms if now_ms is not None else self.clock()
        profile = await self.profile_store.get()
        goal_ml = profile.daily_goal.milliliters

        crossed = False

        def apply(ledger: Ledger) -> tuple[Ledger, IntakeResult]:
            nonlocal crossed
            previous = ledger.get(self.date_fn(timestamp))
            was_reached = previous is not None and previous.goal_reached
            updated, event, record = record_intake(
                ledger, amount, container_type, timestamp, goal_ml, self.date_fn
            )
            crossed = record.goal_reached and not was_reached
            return updated, IntakeResult(event, record, crossed)

        try:
            result = await self.writer.mutate(apply)
        except StorageError:
            # The crossing event is kept in memory, so the goal flag is already set
            if crossed:
                await self._notify_goal_reached()
            raise

        logger.info(
            f"Logged {result.event.amount_ml} ml ({result.event.container_type.value}) "
            f"on {result.record.calendar_date}, total {result.record.total_intake_ml} ml"
        )

        if result.goal_just_reached:
            await self._notify_goal_reached()
        return result

    async def add_container(self, container_type: ContainerType, now_ms: Optional[int] = None) -> IntakeResult:
        """Log one of the preset containers (cup, glass, bottle, jug)"""
        container = WATER_CONTAINERS.get(container_type)
        if container is None:
            raise ValueError(f"No preset amount for container '{container_type.value}'")
        return await self.record_intake(container.amount_ml, container_type, now_ms)

    async def _notify_goal_reached(self) -> None:
        logger.info("Daily water goal reached")
        if self.reminder_scheduler is None:
            return
        try:
            await self.reminder_scheduler.notify_goal_reached()
        except NotificationError as e:
            logger.warning(f"Goal notification not delivered: {e.message}")

    async def today_record(self, now_ms: Optional[int] = None) -> Optional[DailyRecord]:
        ledger = await self.get_ledger()
        return ledger.get(self.date_fn(now_ms if now_ms is not None else self.clock()))

    async def today_total(self, now_ms: Optional[int] = None) -> float:
        record = await self.today_record(now_ms)
        return record.total_intake_ml if record else 0

    async def progress_percent(self, now_ms: Optional[int] = None) -> float:
        """Today's progress toward the goal, capped at 100"""
        profile = await self.profile_store.get()
        return progress_percent(await self.today_total(now_ms), profile.daily_goal.milliliters)
