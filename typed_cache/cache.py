"""
Typed, fail-soft caching facade over a distributed cache backend.
"""

import asyncio
import inspect
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar, Union

from .backends.base import CacheBackend, CacheEntryOptions
from .config import CacheConfiguration
from .errors import CacheException, BackendError, SerializationError, DeserializationError
from .logging import get_logger
from .metrics import CacheMetrics
from .result import Ok, Err, Result
from .serialization import JsonSerializer, Serializer

T = TypeVar("T")

TTL = Union[timedelta, int, float]
Loader = Callable[[], Union[T, Awaitable[T]]]


def _to_timedelta(ttl: TTL) -> timedelta:
    if isinstance(ttl, timedelta):
        return ttl
    return timedelta(seconds=ttl)


def _expires_at(expiration: timedelta) -> Optional[str]:
    try:
        return (datetime.now(timezone.utc) + expiration).isoformat()
    except OverflowError:
        return None


def _absorb(error: Exception, fallback: Type[CacheException]) -> CacheException:
    """Map any failure at a backend call site onto the cache error taxonomy."""
    if isinstance(error, CacheException):
        return error
    return fallback(str(error) or type(error).__name__, {"exception_type": type(error).__name__})


class TypedCache:
    """Typed cache with fail-soft reads/writes and single-flight recomputation.

    Backend and serialization failures from ``get``/``set``/``remove`` are
    logged and turned into a miss or a no-op. ``get_or_compute`` serializes
    recomputation through one lock per instance, so at most one loader runs
    at a time no matter how many keys are missing.
    """

    def __init__(self,
                 backend: CacheBackend,
                 cache_config: CacheConfiguration,
                 serializer: Optional[Serializer] = None,
                 metrics: Optional[CacheMetrics] = None):
        if backend is None:
            raise ValueError("backend is required")
        if cache_config is None:
            raise ValueError("cache_config is required")

        self.backend = backend
        self.cache_config = cache_config
        self.serializer = serializer or JsonSerializer()
        self.metrics = metrics
        self.logger = get_logger("typed_cache.cache")

        self.key_prefix = cache_config.key_prefix or ""
        self._lock = asyncio.Lock()

    def build_key(self, key: str) -> str:
        """Namespace a caller key with the configured prefix."""
        return self.key_prefix + key

    @property
    def enabled(self) -> bool:
        return self.cache_config.cache_enabled

    async def get(self, key: str, value_type: Type[T] = Any) -> Optional[T]:
        """Read and deserialize a value; None on miss or any failure."""
        if not self.enabled:
            self._record("get", "skipped")
            return None

        cache_key = self.build_key(key)
        self.logger.debug("Reading cache", cache_key=cache_key)

        outcome = await self._read(cache_key, value_type)
        if outcome.is_err():
            self._log_failure("get", cache_key, outcome.unwrap_err())
            return None

        value = outcome.unwrap()
        self.logger.debug("Cache read", cache_key=cache_key, hit=value is not None)
        self._record("get", "hit" if value is not None else "miss")
        return value

    async def try_get(self, key: str, value_type: Type[T] = Any) -> Tuple[bool, Optional[T]]:
        """Read a value and report whether one was found."""
        value = await self.get(key, value_type)
        return value is not None, value

    async def set(self, key: str, value: Any, ttl: TTL) -> None:
        """Best-effort write; failures are logged, never raised."""
        if not self.enabled:
            self._record("set", "skipped")
            return

        cache_key = self.build_key(key)
        self.logger.info("Writing cache", cache_key=cache_key)

        outcome = await self._write(cache_key, value, ttl)
        if outcome.is_err():
            self._log_failure("set", cache_key, outcome.unwrap_err())
            return

        expiration = outcome.unwrap()
        self.logger.info(
            "Cache written",
            cache_key=cache_key,
            ttl_seconds=expiration.total_seconds(),
            expires_at=_expires_at(expiration)
        )
        self._record("set", "written")

    async def remove(self, key: str) -> None:
        """Delete a key; missing keys and failures are ignored."""
        if not self.enabled:
            self._record("remove", "skipped")
            return

        cache_key = self.build_key(key)

        outcome = await self._delete(cache_key)
        if outcome.is_err():
            self._log_failure("remove", cache_key, outcome.unwrap_err())
            return

        self.logger.debug("Cache removed", cache_key=cache_key)
        self._record("remove", "removed")

    async def get_or_compute(self,
                             key: str,
                             ttl: TTL,
                             loader: Optional[Loader],
                             value_type: Type[T] = Any) -> Optional[T]:
        """Return the cached value, computing and storing it on a miss.

        Hits never touch the lock. On a miss the caller waits for the
        instance-wide lock, re-reads the key (another caller may have filled
        it meanwhile) and only then runs ``loader``. Exceptions raised by
        ``loader`` propagate unchanged and nothing is written; a failed write
        of the computed value is logged and the value is still returned.

        With ``loader=None`` only the first read runs: the cached value is
        returned when present, otherwise None.

        There is no timeout on the lock or the loader: a hung loader blocks
        every other miss on this instance.
        """
        value = await self.get(key, value_type)
        if value is not None or loader is None:
            return value

        cache_key = self.build_key(key)
        self.logger.debug("Cache miss, waiting for loader lock", cache_key=cache_key)

        wait_started = time.perf_counter()
        async with self._lock:
            self._observe("typed_cache_lock_wait_seconds", time.perf_counter() - wait_started)

            value = await self.get(key, value_type)
            if value is not None:
                self.logger.debug("Value populated while waiting for lock", cache_key=cache_key)
                return value

            self.logger.debug("Invoking loader", cache_key=cache_key)
            value = await self._run_loader(loader)

            if value is not None:
                await self.set(key, value, ttl)

        return value

    async def aclose(self) -> None:
        """Close the underlying backend."""
        await self.backend.close()

    async def _run_loader(self, loader: Loader) -> Any:
        started = time.perf_counter()
        try:
            value = loader()
            if inspect.isawaitable(value):
                value = await value
        except Exception:
            self._count("typed_cache_loader_calls_total", result="failure")
            raise
        finally:
            self._observe("typed_cache_loader_duration_seconds", time.perf_counter() - started)

        self._count("typed_cache_loader_calls_total", result="success")
        return value

    async def _read(self, cache_key: str, value_type: Any) -> Result:
        try:
            payload = await self.backend.get_string(cache_key)
        except Exception as e:
            return Err(_absorb(e, BackendError))

        if payload is None:
            return Ok(None)

        try:
            return Ok(self.serializer.deserialize(payload, value_type))
        except Exception as e:
            return Err(_absorb(e, DeserializationError))

    async def _write(self, cache_key: str, value: Any, ttl: TTL) -> Result:
        try:
            expiration = _to_timedelta(ttl)
        except (TypeError, ValueError, OverflowError) as e:
            return Err(BackendError(f"Invalid expiration: {e}", {"ttl": repr(ttl)}))

        try:
            payload = self.serializer.serialize(value)
        except Exception as e:
            return Err(_absorb(e, SerializationError))

        try:
            await self.backend.set_string(
                cache_key,
                payload,
                CacheEntryOptions(absolute_expiration_relative_to_now=expiration)
            )
        except Exception as e:
            return Err(_absorb(e, BackendError))

        return Ok(expiration)

    async def _delete(self, cache_key: str) -> Result:
        try:
            await self.backend.remove(cache_key)
        except Exception as e:
            return Err(_absorb(e, BackendError))
        return Ok(None)

    def _log_failure(self, operation: str, cache_key: str, error: CacheException):
        fields = error.to_log_fields()
        fields.update(operation=operation, cache_key=cache_key)
        self.logger.warning("Exception was thrown while accessing cache", **fields)
        self._record(operation, "error")
        self._count("typed_cache_errors_total", operation=operation, error_code=error.code)

    def _record(self, operation: str, result: str):
        self._count("typed_cache_requests_total", operation=operation, result=result)

    def _count(self, metric_name: str, **labels):
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, **labels)

    def _observe(self, metric_name: str, value: float):
        if self.metrics is not None:
            self.metrics.observe_histogram(metric_name, value)
