"""
Distributed cache backends.
"""

from .base import CacheBackend, CacheEntryOptions
from .memory import InMemoryBackend
from .redis_backend import RedisBackend

__all__ = ["CacheBackend", "CacheEntryOptions", "InMemoryBackend", "RedisBackend"]
