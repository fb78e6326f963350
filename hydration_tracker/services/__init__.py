"""
Service Layer Package

Business logic services sitting between the presentation layer and the
key-value persistence capability.

Core Services:
- ProfileStore: User profile, preferences, goal recalculation, onboarding
- IntakeLedger: Water intake logging and today's progress
- HistoryService: Weekly and monthly chart views and summaries
- ServiceContainer: Explicit application state wiring the services together
"""

from hydration_tracker.services.container import ServiceContainer
from hydration_tracker.services.profile_service import ProfileStore
from hydration_tracker.services.ledger_service import IntakeLedger, IntakeResult
from hydration_tracker.services.history_service import HistoryService

__all__ = [
    "ServiceContainer",
    "ProfileStore",
    "IntakeLedger",
    "IntakeResult",
    "HistoryService",
]
