"""
In-memory key-value backend with optimistic concurrency.
"""

import threading
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import BackendError, KeyNotFoundError
from ..core.logging import LoggerMixin
from .base import KeyLister, KeyValueStore, UpdateFunc, UpdateResult


class MemoryKVStore(KeyValueStore, KeyLister, LoggerMixin):
    """
    Dictionary-backed store. Each entry carries a version number; an update
    commits only if the version it read is still current, otherwise the
    cycle is retried with the fresh value. The lock is held for snapshot and
    commit only, never while fn runs.
    """

    def __init__(self, max_attempts: int = 100):
        self.max_attempts = max_attempts
        self._data: Dict[str, Tuple[int, bytes]] = {}
        self._lock = threading.Lock()

    def _snapshot(self, key: str) -> Tuple[int, Optional[bytes]]:
        with self._lock:
            entry = self._data.get(key)
        if entry is None:
            return 0, None
        return entry

    async def get(self, key: str) -> bytes:
        version, value = self._snapshot(key)
        if value is None:
            raise KeyNotFoundError(key)
        return value

    async def update(self, key: str, fn: UpdateFunc) -> UpdateResult:
        for attempt in range(self.max_attempts):
            version, old = self._snapshot(key)
            new = fn(old)
            if new is None:
                return UpdateResult(value=old, written=False)
            with self._lock:
                current = self._data.get(key)
                current_version = current[0] if current is not None else 0
                if current_version == version:
                    self._data[key] = (version + 1, bytes(new))
                    return UpdateResult(value=bytes(new), written=True)
            self.logger.debug(f"Update conflict on {key!r}, retrying (attempt {attempt + 1})")
        raise BackendError(f"cannot update {key!r}: too many concurrent modifications")

    async def keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())
