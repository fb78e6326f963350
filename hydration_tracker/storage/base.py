"""
Key-value persistence capability

Two logical keys are used, each holding a complete JSON snapshot:
- PROFILE_KEY: the user profile record
- LEDGER_KEY: the array of daily intake records
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

PROFILE_KEY = "@DrinkMe_UserData"
LEDGER_KEY = "water_intake_history"


class KeyValueStore(ABC):
    """
    Async string key-value store.

    Implementations raise StorageError subclasses on backend failure and
    return None for absent keys. set() replaces the whole value atomically.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored string or None if absent"""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value"""

    async def close(self) -> None:
        """Release backend resources"""


class InMemoryStore(KeyValueStore):
    """Dict-backed store; nothing survives the process"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
        logger.debug(f"Stored {len(value)} chars under {key}")


def create_store(backend: str) -> KeyValueStore:
    """
    Build the configured store

    Args:
        backend: 'file', 'redis' or 'memory'

    Raises:
        ConfigurationError: Unknown backend
    """
    from hydration_tracker import config
    from hydration_tracker.exceptions import ConfigurationError

    if backend == "memory":
        logger.warning("Using in-memory storage - data is NOT persisted across restarts")
        return InMemoryStore()
    if backend == "file":
        from hydration_tracker.storage.file_store import JsonFileStore
        return JsonFileStore(config.DATA_PATH)
    if backend == "redis":
        from hydration_tracker.storage.redis_store import RedisStore
        return RedisStore(config.REDIS_URL)

    raise ConfigurationError(
        message=f"Unknown storage backend: {backend}",
        config_key="STORAGE_BACKEND",
    )
