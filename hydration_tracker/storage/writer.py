"""
Single-writer snapshot persistence.

Every mutation of a persisted snapshot runs read-modify-write inside one
asyncio.Lock, so two back-to-back actions (two quick "add water" taps) can
never both start from the same stale snapshot.

Read policy:
- An absent or malformed payload (CorruptPayloadError) loads defaults
- An unreachable backend raises StorageError and nothing is loaded, so a
  later write can never replace stored data with defaults

Write policy:
- A failed write raises StorageError to the caller
- The mutated snapshot stays in memory and is marked dirty
- The next write (or flush()) persists the full snapshot again
"""

import asyncio
import json
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from hydration_tracker.exceptions import CorruptPayloadError, StorageError
from hydration_tracker.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class SnapshotWriter(Generic[T]):
    """Owns one key's snapshot and serializes all writes to it"""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
        default_factory: Callable[[], T],
    ):
        """
        Args:
            store: Key-value persistence capability
            key: Storage key for this snapshot
            encode: Snapshot -> JSON-serializable value
            decode: Parsed JSON -> snapshot (raise on malformed data)
            default_factory: Snapshot used when nothing valid is stored
        """
        self.store = store
        self.key = key
        self._encode = encode
        self._decode = decode
        self._default_factory = default_factory
        self._lock = asyncio.Lock()
        self._snapshot: Optional[T] = None
        self._dirty = False

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def dirty(self) -> bool:
        """True when the in-memory snapshot has not been persisted"""
        return self._dirty

    @property
    def snapshot(self) -> T:
        if self._snapshot is None:
            raise RuntimeError(f"Snapshot for '{self.key}' not loaded; call load() first")
        return self._snapshot

    async def load(self) -> T:
        """
        Read the snapshot from the store, replacing the in-memory copy

        Raises:
            StorageError: The backend could not be read
        """
        async with self._lock:
            self._snapshot = await self._read()
            self._dirty = False
            return self._snapshot

    async def _read(self) -> T:
        # Backend failures propagate; the snapshot stays unloaded and the next call reads again
        raw = await self.store.get(self.key)
        if raw is None:
            logger.debug(f"No stored value for '{self.key}', using defaults")
            return self._default_factory()
        try:
            return self._parse(raw)
        except CorruptPayloadError as e:
            logger.warning(f"Could not read '{self.key}', using defaults: {e.message}")
            return self._default_factory()

    def _parse(self, raw: str) -> T:
        try:
            return self._decode(json.loads(raw))
        except (ValueError, TypeError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
            raise CorruptPayloadError(
                message=f"Malformed payload under '{self.key}': {e}",
                key=self.key,
                operation="snapshot_read",
                cause=e,
            )

    async def mutate(self, fn: Callable[[T], tuple[T, R]]) -> R:
        """
        Apply fn to the current snapshot and persist the result

        Args:
            fn: Pure function snapshot -> (new_snapshot, result)

        Returns:
            The result part of fn's return value

        Raises:
            StorageError: The write failed; the new snapshot is kept in
                memory and retried on the next write
            StorageError: The first read failed; nothing is changed
        """
        async with self._lock:
            if self._snapshot is None:
                self._snapshot = await self._read()

            new_snapshot, result = fn(self._snapshot)
            self._snapshot = new_snapshot
            self._dirty = True
            await self._persist()
            return result

    async def flush(self) -> None:
        """Persist the in-memory snapshot if an earlier write failed"""
        async with self._lock:
            if self._dirty:
                await self._persist()

    async def _persist(self) -> None:
        serialized = json.dumps(self._encode(self._snapshot))
        try:
            await self.store.set(self.key, serialized)
        except StorageError:
            logger.error(f"Write of '{self.key}' failed; snapshot kept in memory for retry")
            raise
        except Exception as e:
            logger.error(f"Write of '{self.key}' failed; snapshot kept in memory for retry")
            raise StorageError(
                message=f"Write of '{self.key}' failed: {e}",
                key=self.key,
                operation="snapshot_write",
                cause=e,
            )
        self._dirty = False
