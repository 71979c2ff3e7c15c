"""
Typed caching facade over a distributed key/value cache.

- cache: TypedCache with fail-soft get/set/remove and single-flight get_or_compute
- backends: CacheBackend interface plus Redis and in-memory stores
- serialization: JSON payloads validated into typed values via pydantic
- config: pydantic-settings configuration
- logging: structlog configuration
- metrics: Prometheus counters and histograms
- errors: cache error taxonomy
"""

from .backends import CacheBackend, CacheEntryOptions, InMemoryBackend, RedisBackend
from .cache import TypedCache
from .config import BackendSettings, CacheConfiguration
from .errors import CacheException, BackendError, SerializationError, DeserializationError
from .factory import create_backend, create_typed_cache, setup_logging
from .metrics import CacheMetrics
from .serialization import JsonSerializer, Serializer

__version__ = "1.0.0"

__all__ = [
    "TypedCache",
    "CacheBackend",
    "CacheEntryOptions",
    "InMemoryBackend",
    "RedisBackend",
    "BackendSettings",
    "CacheConfiguration",
    "CacheException",
    "BackendError",
    "SerializationError",
    "DeserializationError",
    "CacheMetrics",
    "JsonSerializer",
    "Serializer",
    "create_backend",
    "create_typed_cache",
    "setup_logging",
]
