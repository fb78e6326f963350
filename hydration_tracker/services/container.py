"""
Service Container - Application State

Holds the infrastructure capabilities (storage, notifications, clock) and
lazily builds the services that share them. Construct one explicitly and
pass it to whatever needs it; there is no module-level instance.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from hydration_tracker.exceptions import StorageError
from hydration_tracker.models.profile import Gender
from hydration_tracker.models.reminder import ReminderStrategy
from hydration_tracker.notifications.base import NotificationCapability
from hydration_tracker.storage.base import KeyValueStore
from hydration_tracker.utils.datetime_helpers import ClockFn, LocalDateFn, system_clock_ms

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Dependency container for the hydration services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, notifier, date_fn, clock) are injected.
    """

    # Infrastructure dependencies (injected)
    store: KeyValueStore
    notifier: NotificationCapability
    date_fn: LocalDateFn
    clock: ClockFn = system_clock_ms
    reminder_strategy: ReminderStrategy = ReminderStrategy.EVENLY_SPACED
    unspecified_rate: Gender = Gender.FEMALE

    # Services (lazy-loaded via properties)
    _profile_store: Optional[object] = field(default=None, init=False, repr=False)
    _intake_ledger: Optional[object] = field(default=None, init=False, repr=False)
    _history_service: Optional[object] = field(default=None, init=False, repr=False)
    _reminder_scheduler: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def profile_store(self):
        """Get ProfileStore instance (lazy-loaded)"""
        if self._profile_store is None:
            from hydration_tracker.services.profile_service import ProfileStore
            self._profile_store = ProfileStore(
                self.store,
                unspecified_rate=self.unspecified_rate,
                reminder_scheduler=self.reminder_scheduler,
            )
            logger.debug("ProfileStore instantiated")
        return self._profile_store

    @property
    def reminder_scheduler(self):
        """Get ReminderScheduler instance (lazy-loaded)"""
        if self._reminder_scheduler is None:
            from hydration_tracker.scheduler.reminder_manager import ReminderScheduler
            self._reminder_scheduler = ReminderScheduler(self.notifier, strategy=self.reminder_strategy)
            logger.debug("ReminderScheduler instantiated")
        return self._reminder_scheduler

    @property
    def intake_ledger(self):
        """Get IntakeLedger instance (lazy-loaded)"""
        if self._intake_ledger is None:
            from hydration_tracker.services.ledger_service import IntakeLedger
            self._intake_ledger = IntakeLedger(
                self.store,
                self.profile_store,
                self.date_fn,
                clock=self.clock,
                reminder_scheduler=self.reminder_scheduler,
            )
            logger.debug("IntakeLedger instantiated")
        return self._intake_ledger

    @property
    def history_service(self):
        """Get HistoryService instance (lazy-loaded)"""
        if self._history_service is None:
            from hydration_tracker.services.history_service import HistoryService
            self._history_service = HistoryService(
                self.intake_ledger,
                self.profile_store,
                self.date_fn,
                clock=self.clock,
            )
            logger.debug("HistoryService instantiated")
        return self._history_service

    async def start(self) -> None:
        """
        Load persisted state and install reminders for the loaded profile

        An unreachable store is logged and leaves state unloaded; each
        service retries the read on its next access.
        """
        try:
            profile = await self.profile_store.load()
            await self.intake_ledger.load_ledger()
        except StorageError as e:
            logger.error(f"Could not load saved state, will retry on next access: {e.message}")
            return
        if not profile.first_time:
            await self.reminder_scheduler.reschedule(profile)

    async def close(self) -> None:
        await self.store.close()
