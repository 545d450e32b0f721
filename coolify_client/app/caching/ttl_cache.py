"""
In-memory TTL cache for upstream API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar
from contextlib import contextmanager
import threading
import time

from shared.logging import get_logger


DEFAULT_TTL_SECONDS = 30.0

V = TypeVar("V")


class ReadWriteLock:
    """Many concurrent readers, one exclusive writer.

    Writers wait for active readers to drain; new readers wait while a
    writer holds or is waiting for the lock.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class _CacheEntry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """Key/value store with per-entry expiry and prefix eviction.

    Expiry is lazy: an entry read at or after its deadline is reported as
    absent but stays in storage until the key is next written or deleted.
    Values are stored by reference and never copied, so callers must not
    mutate a value after handing it to ``set``.
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl if default_ttl > 0 else DEFAULT_TTL_SECONDS
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: Dict[str, _CacheEntry[V]] = {}
        self.logger = get_logger("coolify.cache")

    def get(self, key: str) -> Tuple[Optional[V], bool]:
        """Return ``(value, True)`` for a live entry, else ``(None, False)``."""
        with self._lock.read():
            entry = self._entries.get(key)
            if entry is None or self._clock() >= entry.expires_at:
                return None, False
            return entry.value, True

    def set(self, key: str, value: V, ttl: Optional[float] = None) -> None:
        """Store ``value``; a missing or non-positive ``ttl`` uses the default."""
        if ttl is None or ttl <= 0:
            ttl = self.default_ttl
        with self._lock.write():
            self._entries[key] = _CacheEntry(value=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> None:
        with self._lock.write():
            self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with ``prefix``."""
        with self._lock.write():
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]

        if doomed:
            self.logger.debug("Cache prefix invalidated", prefix=prefix, removed=len(doomed))
        return len(doomed)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
