"""Global test fixtures and utilities for hydration-tracker tests"""
import pytest
from datetime import datetime, timezone

from hydration_tracker.notifications.base import InMemoryNotifier
from hydration_tracker.services.container import ServiceContainer
from hydration_tracker.storage.base import InMemoryStore
from hydration_tracker.utils.datetime_helpers import make_local_date_fn


# ============================================================================
# Clock & Date Fixtures
# ============================================================================

def _epoch_ms(year, month, day, hour=12, minute=0, second=0):
    return int(datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.fixture
def epoch_ms():
    """Build a UTC epoch-millisecond timestamp"""
    return _epoch_ms


@pytest.fixture
def utc_date_fn():
    """Calendar dates derived in UTC, independent of the host timezone"""
    return make_local_date_fn("UTC")


@pytest.fixture
def fixed_now_ms():
    """Wednesday 2025-01-15 09:00 UTC"""
    return _epoch_ms(2025, 1, 15, 9)


@pytest.fixture
def fixed_clock(fixed_now_ms):
    return lambda: fixed_now_ms


# ============================================================================
# Infrastructure Fixtures
# ============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory key-value store"""
    return InMemoryStore()


@pytest.fixture
def notifier():
    """Notifier with permission granted that records schedules"""
    return InMemoryNotifier()


@pytest.fixture
def container(memory_store, notifier, utc_date_fn, fixed_clock):
    """Service container over in-memory infrastructure"""
    return ServiceContainer(
        store=memory_store,
        notifier=notifier,
        date_fn=utc_date_fn,
        clock=fixed_clock,
    )
