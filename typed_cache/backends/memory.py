"""
In-process backend with per-entry expiry.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from ..errors import BackendError
from .base import CacheBackend, CacheEntryOptions


class InMemoryBackend(CacheBackend):
    """Dict-backed store for local development and tests.

    Entries are evicted lazily on read once their deadline passes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[float, str]] = {}

    async def get_string(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= self._clock():
            self._data.pop(key, None)
            return None
        return value

    async def set_string(self, key: str, value: str, options: CacheEntryOptions) -> None:
        ttl = options.absolute_expiration_relative_to_now.total_seconds()
        if ttl <= 0:
            raise BackendError("Expiration must be positive", {"cache_key": key, "ttl_seconds": ttl})
        self._data[key] = (self._clock() + ttl, value)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def close(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data
