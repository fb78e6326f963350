"""JSON snapshot files, one per storage key"""
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from hydration_tracker.exceptions import wrap_external_exception
from hydration_tracker.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStore(KeyValueStore):
    """Store each key as <data_path>/<key>.json, replaced atomically on write"""

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path)

    def path_for(self, key: str) -> Path:
        return self.data_path / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    async def get(self, key: str) -> Optional[str]:
        filepath = self.path_for(key)
        if not filepath.exists():
            return None
        try:
            return filepath.read_text(encoding="utf-8")
        except OSError as e:
            raise wrap_external_exception(e, operation="file_store_get", key=key)

    async def set(self, key: str, value: str) -> None:
        filepath = self.path_for(key)
        try:
            self.data_path.mkdir(parents=True, exist_ok=True)
            # Write beside the target then rename, so readers never see half a file
            fd, tmp_name = tempfile.mkstemp(dir=self.data_path, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, filepath)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise wrap_external_exception(e, operation="file_store_set", key=key)

        logger.debug(f"Wrote {filepath}")
