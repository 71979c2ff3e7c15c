"""
Shared fixtures for typed cache tests.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from typed_cache import CacheConfiguration, InMemoryBackend, TypedCache
from typed_cache.backends.base import CacheBackend, CacheEntryOptions
from typed_cache.errors import BackendError


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingBackend(CacheBackend):
    """Backend stub that records every call and can be told to fail."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.calls: List[Tuple[str, Any]] = []
        self.options: Dict[str, CacheEntryOptions] = {}
        self.fail_on: set = set()

    def _maybe_fail(self, operation: str):
        if operation in self.fail_on:
            raise BackendError(f"{operation} unavailable")

    async def get_string(self, key: str) -> Optional[str]:
        self.calls.append(("get_string", key))
        self._maybe_fail("get_string")
        return self.store.get(key)

    async def set_string(self, key: str, value: str, options: CacheEntryOptions) -> None:
        self.calls.append(("set_string", key))
        self._maybe_fail("set_string")
        self.store[key] = value
        self.options[key] = options

    async def remove(self, key: str) -> None:
        self.calls.append(("remove", key))
        self._maybe_fail("remove")
        self.store.pop(key, None)


class DummyMetrics:
    """Minimal metrics collector stub."""

    def __init__(self):
        self.counters = []
        self.histograms = []

    def increment_counter(self, metric_name: str, **labels):
        self.counters.append((metric_name, labels))

    def observe_histogram(self, metric_name: str, value: float, **labels):
        self.histograms.append((metric_name, value, labels))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_backend(clock):
    return InMemoryBackend(clock=clock)


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def cache_config():
    return CacheConfiguration(cache_enabled=True, key_prefix="orders:")


@pytest.fixture
def cache(memory_backend, cache_config):
    return TypedCache(memory_backend, cache_config)
