"""
Construction helpers for TypedCache.
"""

from typing import Optional

from .backends.base import CacheBackend
from .backends.redis_backend import RedisBackend
from .cache import TypedCache
from .config import BackendSettings, CacheConfiguration, get_backend_settings, get_cache_configuration
from .logging import configure_logging
from .metrics import CacheMetrics
from .serialization import Serializer


def create_backend(settings: Optional[BackendSettings] = None) -> RedisBackend:
    """Build a RedisBackend from connection settings."""
    if settings is None:
        settings = get_backend_settings()
    return RedisBackend(
        redis_url=settings.redis_url,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_connect_timeout,
        health_check_interval=settings.health_check_interval,
    )


def setup_logging(settings: Optional[BackendSettings] = None) -> None:
    """Configure structured logging at the level named in the settings."""
    if settings is None:
        settings = get_backend_settings()
    configure_logging(settings.log_level)


def create_typed_cache(config: Optional[CacheConfiguration] = None,
                       settings: Optional[BackendSettings] = None,
                       backend: Optional[CacheBackend] = None,
                       serializer: Optional[Serializer] = None,
                       metrics: Optional[CacheMetrics] = None) -> TypedCache:
    """Build a TypedCache, defaulting to env configuration and a Redis backend."""
    if config is None:
        config = get_cache_configuration()
    if backend is None:
        backend = create_backend(settings)
    return TypedCache(backend, config, serializer=serializer, metrics=metrics)
